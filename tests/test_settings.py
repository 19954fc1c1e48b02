import calendar

import pytest

from core.exceptions import ValidationError
from core.models import ViewMode
from core.settings import GanttSettings


def test_defaults():
    settings = GanttSettings()

    assert settings.day_width(ViewMode.DAY) == 40
    assert settings.day_width(ViewMode.WEEK) == 20
    assert settings.day_width(ViewMode.MONTH) == 8
    assert settings.week_start == calendar.SUNDAY
    assert settings.overload_threshold == 2


def test_env_overrides():
    settings = GanttSettings.from_env(
        {
            "PM_GANTT_DAY_WIDTH": "50",
            "PM_GANTT_WEEK_START": "Monday",
            "PM_GANTT_OVERLOAD_THRESHOLD": "3",
            "PM_GANTT_HANDLE_WIDTH": "6",
        }
    )

    assert settings.day_width(ViewMode.DAY) == 50
    assert settings.day_width(ViewMode.WEEK) == 20
    assert settings.week_start == calendar.MONDAY
    assert settings.overload_threshold == 3
    assert settings.handle_width == 6


def test_empty_env_gives_defaults():
    assert GanttSettings.from_env({}) == GanttSettings()


@pytest.mark.parametrize(
    "env, code",
    [
        ({"PM_GANTT_WEEK_START": "someday"}, "SETTINGS_INVALID_WEEK_START"),
        ({"PM_GANTT_MONTH_WIDTH": "wide"}, "SETTINGS_INVALID_VALUE"),
        ({"PM_GANTT_OVERLOAD_THRESHOLD": "0"}, "SETTINGS_INVALID_VALUE"),
    ],
)
def test_invalid_env_values(env, code):
    with pytest.raises(ValidationError) as exc:
        GanttSettings.from_env(env)
    assert exc.value.code == code
