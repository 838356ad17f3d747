"""Static emoji/label lookup keyed by level tags. Classification never reads these."""

from dataclasses import dataclass
from typing import Dict

from finzen_health.domain.models import (
    Advice,
    BurnRateLevel,
    ControlStatus,
    RunwayLevel,
    VolatilityLevel,
)


@dataclass(frozen=True)
class Display:
    emoji: str
    label: str


VOLATILITY_DISPLAY: Dict[VolatilityLevel, Display] = {
    VolatilityLevel.ZEN: Display("🧘", "Maestro Zen"),
    VolatilityLevel.CHILL: Display("😌", "Relajado"),
    VolatilityLevel.WILD: Display("🌊", "Un poco Loco"),
    VolatilityLevel.CAOS: Display("🎢", "Montaña Rusa"),
}

BURN_RATE_DISPLAY: Dict[BurnRateLevel, Display] = {
    BurnRateLevel.AHORRO: Display("🐌", "Modo Ahorro"),
    BurnRateLevel.NORMAL: Display("🚶", "Normal"),
    BurnRateLevel.FAST: Display("🏃", "Vida Rápida"),
    BurnRateLevel.MILLIONAIRE: Display("💸", "Millonario"),
}

RUNWAY_DISPLAY: Dict[RunwayLevel, Display] = {
    RunwayLevel.DANGER: Display("🚨", "Zona Peligrosa"),
    RunwayLevel.TIGHT: Display("⚠️", "Presupuesto Ajustado"),
    RunwayLevel.GETTING_BY: Display("💛", "Saliendo Adelante"),
    RunwayLevel.STABLE: Display("✅", "Estable"),
}

ADVICE_TEXT: Dict[Advice, str] = {
    Advice.STOP_SPENDING: "Frena ya!",
    Advice.INCREASE_INCOME: "Necesitas más ingresos",
    Advice.CONTROL_SPENDING: "Controla tus gastos",
    Advice.REDUCE_DAILY_SPEND: "Reduce gastos diarios",
    Advice.SAVE_MORE: "Ahorra un poco más",
    Advice.KEEP_IT_UP: "Sigue así!",
}

CONTROL_DISPLAY: Dict[ControlStatus, Display] = {
    ControlStatus.NO_BUDGETS: Display("📊", "Sin presupuestos"),
    # Label is a template: filled with the share of budget still unused
    ControlStatus.WELL_CONTROLLED: Display("✅", "{percent}% bajo control"),
    ControlStatus.NORMAL: Display("🟡", "Control normal"),
    ControlStatus.TIGHT: Display("⚠️", "Control ajustado"),
}


def describe_volatility(level: VolatilityLevel) -> Display:
    return VOLATILITY_DISPLAY[level]


def describe_burn_rate(level: BurnRateLevel) -> Display:
    return BURN_RATE_DISPLAY[level]


def describe_runway(level: RunwayLevel) -> Display:
    return RUNWAY_DISPLAY[level]


def advice_text(advice: Advice) -> str:
    return ADVICE_TEXT[advice]


def describe_control(status: ControlStatus, unused_percent: int = 0) -> Display:
    display = CONTROL_DISPLAY[status]
    return Display(display.emoji, display.label.format(percent=unused_percent))
