"""Tests for timer modes, presets, mode detection and config coercion."""

import pytest

from wodtimer.timer.config import (
    DEFAULT_ROUNDS,
    TimerConfig,
    coerce_positive,
)
from wodtimer.timer.modes import (
    FORM_DEFAULTS,
    MODE_LABELS,
    TimerMode,
    detect_mode,
    form_defaults,
    uses_rounds,
    uses_sub_phases,
)


# ═══════════════════════════════════════════════════════════════════════════
#  INPUT COERCION
# ═══════════════════════════════════════════════════════════════════════════


class TestCoercePositive:

    @pytest.mark.parametrize("raw", ["", "   ", None, "abc", "min 5", "0", "0.9", "-5", 0, -3, True])
    def test_invalid_falls_back(self, raw):
        assert coerce_positive(raw, 42) == 42

    @pytest.mark.parametrize("raw, expected", [
        ("12", 12), (" 7 ", 7), (30, 30), ("007", 7), ("5.5", 5), ("12 min", 12),
    ])
    def test_valid_values(self, raw, expected):
        assert coerce_positive(raw, 42) == expected


class TestTimerConfig:

    def test_defaults_per_mode(self):
        assert TimerConfig.defaults_for(TimerMode.TABATA).total_rounds == 8
        assert TimerConfig.defaults_for(TimerMode.EMOM).total_rounds == 10
        assert TimerConfig.defaults_for(TimerMode.OTM).total_rounds == 5
        assert TimerConfig.defaults_for(TimerMode.AMRAP).total_rounds == 1
        assert set(DEFAULT_ROUNDS) == set(TimerMode)

    def test_work_default_is_seconds_except_otm(self):
        assert TimerConfig.from_inputs(TimerMode.TABATA, work_time="").work_seconds == 20
        assert TimerConfig.from_inputs(TimerMode.OTM, work_time="").work_seconds == 1

    def test_from_form_strings(self):
        cfg = TimerConfig.from_inputs(
            TimerMode.TABATA,
            work_time="30", rest_time="15", total_rounds="6", amrap_time="",
        )
        assert cfg == TimerConfig(30, 15, 6, 10)

    def test_from_loose_text(self):
        cfg = TimerConfig.from_inputs(TimerMode.AMRAP, amrap_time="12 min", rest_time="45.5")
        assert cfg.amrap_minutes == 12
        assert cfg.rest_seconds == 45

    def test_is_frozen(self):
        cfg = TimerConfig()
        with pytest.raises(AttributeError):
            cfg.work_seconds = 5

    def test_derived_lengths(self):
        cfg = TimerConfig(work_seconds=3, rest_seconds=2, total_rounds=4, amrap_minutes=12)
        assert cfg.amrap_seconds == 720
        assert cfg.cycle_seconds == 5
        assert cfg.round_interval(TimerMode.EMOM) == 60
        assert cfg.round_interval(TimerMode.OTM) == 180

    @pytest.mark.parametrize("mode", list(TimerMode))
    def test_form_defaults_parse_cleanly(self, mode):
        cfg = TimerConfig.from_inputs(mode, **form_defaults(mode))
        assert cfg.total_rounds >= 1
        assert cfg.work_seconds >= 1
        assert cfg.rest_seconds >= 1

    def test_otm_form_rest_zero_is_defaulted(self):
        cfg = TimerConfig.from_inputs(TimerMode.OTM, **FORM_DEFAULTS[TimerMode.OTM])
        assert cfg.work_seconds == 2
        assert cfg.rest_seconds == 10


# ═══════════════════════════════════════════════════════════════════════════
#  MODES
# ═══════════════════════════════════════════════════════════════════════════


class TestTimerMode:

    def test_parse_known_values(self):
        assert TimerMode.parse("tabata") == TimerMode.TABATA
        assert TimerMode.parse(" EMOM ") == TimerMode.EMOM
        assert TimerMode.parse(TimerMode.OTM) == TimerMode.OTM

    @pytest.mark.parametrize("raw", ["", "crossfit", None, "for time"])
    def test_parse_unknown_is_normal(self, raw):
        assert TimerMode.parse(raw) == TimerMode.NORMAL

    def test_every_mode_has_a_label(self):
        assert set(MODE_LABELS) == set(TimerMode)
        assert MODE_LABELS[TimerMode.NORMAL] == "Cronómetro"

    def test_form_defaults_are_copies(self):
        values = form_defaults(TimerMode.TABATA)
        values["work_time"] = "99"
        assert FORM_DEFAULTS[TimerMode.TABATA]["work_time"] == "20"

    def test_generic_form_defaults(self):
        assert form_defaults(TimerMode.FORTIME)["total_rounds"] == "8"


class TestDetectMode:

    @pytest.mark.parametrize("title, blocks, expected", [
        ("AMRAP 12", "", TimerMode.AMRAP),
        ("Lunes", "EMOM 10: 5 power cleans", TimerMode.EMOM),
        ("Fuerza", "OTM cada 2 min", TimerMode.OTM),
        ("Tabata sit-ups", "", TimerMode.TABATA),
        ("Fran", "For Time: 21-15-9", TimerMode.FORTIME),
        ("Fran", "fortime", TimerMode.FORTIME),
        ("Movilidad", "estiramientos", TimerMode.NORMAL),
        ("", "", TimerMode.NORMAL),
    ])
    def test_keywords(self, title, blocks, expected):
        assert detect_mode(title, blocks) == expected

    def test_amrap_wins_over_emom(self):
        assert detect_mode("EMOM + AMRAP finisher") == TimerMode.AMRAP


class TestModeTraits:

    def test_sub_phases(self):
        assert uses_sub_phases(TimerMode.TABATA, 8)
        assert uses_sub_phases(TimerMode.AMRAP, 3)
        assert not uses_sub_phases(TimerMode.AMRAP, 1)
        assert not uses_sub_phases(TimerMode.EMOM, 10)

    def test_rounds(self):
        assert uses_rounds(TimerMode.EMOM, 10)
        assert uses_rounds(TimerMode.OTM, 5)
        assert uses_rounds(TimerMode.AMRAP, 2)
        assert not uses_rounds(TimerMode.AMRAP, 1)
        assert not uses_rounds(TimerMode.NORMAL, 8)
