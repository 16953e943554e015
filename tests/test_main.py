from zoneinfo import ZoneInfo

import pytest

from checkin_tracker.config import Config
from checkin_tracker.main import CheckinBot
from checkin_tracker.timer import AlreadyActive, NoActiveSession


@pytest.fixture
def bot() -> CheckinBot:
    config = Config(discord_token="token", guild_id=1, timezone=ZoneInfo("UTC"), goal_sessions=10)
    return CheckinBot(config)


def test_state_for_creates_one_state_per_member(bot) -> None:
    first = bot.state_for("100")

    assert bot.state_for("100") is first
    assert bot.state_for("200") is not first
    assert first.goal_sessions == 10


def test_check_in_and_out_messages(bot) -> None:
    assert bot.check_in_member("100").startswith("Checked in at `")
    assert bot.active_session_count() == 1

    message = bot.check_out_member("100")

    assert message.startswith("Checked out after `00:00:")
    assert message.endswith("Monthly progress: 10%.")
    assert bot.active_session_count() == 0
    assert len(bot.state_for("100").history) == 1


def test_member_errors_propagate(bot) -> None:
    with pytest.raises(NoActiveSession):
        bot.check_out_member("100")

    bot.check_in_member("100")
    with pytest.raises(AlreadyActive):
        bot.check_in_member("100")


def test_attendance_card_uses_member_state(bot) -> None:
    bot.check_in_member("100")

    card = bot.attendance_card("100", "Alice")

    assert card.startswith("**Attendance - Alice**")
    assert "Session Active" in card


def test_release_timers_closes_every_state(bot) -> None:
    bot.check_in_member("100")
    bot.state_for("200")

    bot.release_timers()

    assert all(not state.timer.is_ticking for state in bot.states.values())


def test_wellness_logs_are_kept_per_member(bot) -> None:
    bot.log_water_member("100", 500)

    assert bot.wellness_for("100") is bot.wellness_for("100")
    assert bot.wellness_for("200").water_ml == {}
    assert sum(bot.wellness_for("100").water_ml.values()) == 500
