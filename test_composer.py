"""Tests for notification composition."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from composer import (
    CHECKLIST,
    FIELD_CHECKLIST,
    FIELD_DATETIME,
    FIELD_PERIOD,
    FIELD_SCHEDULE,
    FIELD_TIP,
    FIELD_UPCOMING,
    HEALTH_TIPS,
    PERIOD_COLORS,
    NotificationComposer,
    compose_notification,
)
from dose_schedule import evaluate_schedule
from time_context import GREETINGS, Period, resolve_time_context

JST = ZoneInfo("Asia/Tokyo")


def first_tip(tips):
    return tips[0]


def last_tip(tips):
    return tips[-1]


def run_at(hour, minute=0, tip_selector=first_tip, **kwargs):
    ctx = resolve_time_context(datetime(2026, 10, 18, hour, minute, tzinfo=JST))
    composer = NotificationComposer(tip_selector=tip_selector, **kwargs)
    return ctx, composer.compose(ctx, evaluate_schedule(ctx))


def field_names(message):
    return [field.name for field in message.embeds[0].fields]


def field_value(message, name):
    return next(field.value for field in message.embeds[0].fields if field.name == name)


def test_field_order_with_upcoming():
    _, message = run_at(9)
    assert field_names(message) == [
        FIELD_DATETIME, FIELD_PERIOD, FIELD_SCHEDULE, FIELD_UPCOMING, FIELD_CHECKLIST, FIELD_TIP,
    ]
    assert [field.inline for field in message.embeds[0].fields] == [True, True, False, False, False, False]


def test_upcoming_field_omitted_when_nothing_left():
    _, message = run_at(23)
    assert FIELD_UPCOMING not in field_names(message)
    assert field_names(message) == [FIELD_DATETIME, FIELD_PERIOD, FIELD_SCHEDULE, FIELD_CHECKLIST, FIELD_TIP]


def test_morning_document_at_0730():
    ctx, message = run_at(7, 30)
    embed = message.embeds[0]

    assert ctx.period is Period.MORNING
    assert embed.title == "💊 薬の服薬確認"
    assert embed.description.startswith(GREETINGS[Period.MORNING])
    assert embed.color == PERIOD_COLORS[Period.MORNING]
    assert field_value(message, FIELD_DATETIME) == "日曜日 2026/10/18 07:30"
    assert field_value(message, FIELD_PERIOD) == "朝"
    assert field_value(message, FIELD_SCHEDULE) == "\n".join([
        "⏳ 08:00 朝の薬",
        "⏳ 12:30 昼の薬",
        "⏳ 19:00 夜の薬",
        "⏳ 22:00 寝る前の薬",
    ])
    assert field_value(message, FIELD_UPCOMING) == "▶ 08:00 朝の薬\n▶ 12:30 昼の薬"
    assert embed.timestamp == ctx.instant


def test_schedule_marks_due_slots():
    _, message = run_at(20)
    assert field_value(message, FIELD_SCHEDULE).splitlines() == [
        "✅ 08:00 朝の薬",
        "✅ 12:30 昼の薬",
        "✅ 19:00 夜の薬",
        "⏳ 22:00 寝る前の薬",
    ]


@pytest.mark.parametrize("hour, period", [(11, Period.MORNING), (12, Period.AFTERNOON), (18, Period.EVENING)])
def test_color_and_greeting_follow_period(hour, period):
    _, message = run_at(hour)
    embed = message.embeds[0]
    assert embed.color == PERIOD_COLORS[period]
    assert embed.description.split("\n")[0] == GREETINGS[period]


def test_checklist_is_static():
    _, morning = run_at(7)
    _, night = run_at(23)
    assert field_value(morning, FIELD_CHECKLIST) == field_value(night, FIELD_CHECKLIST) == "\n".join(CHECKLIST)
    assert len(CHECKLIST) == 4


def test_tip_is_always_a_candidate():
    for _ in range(20):
        _, message = run_at(10, tip_selector=None)
        assert field_value(message, FIELD_TIP) in HEALTH_TIPS
    assert len(HEALTH_TIPS) == 4


def test_different_tips_change_only_the_tip_field():
    _, first = run_at(10, tip_selector=first_tip)
    _, last = run_at(10, tip_selector=last_tip)

    first_payload = first.to_payload()
    last_payload = last.to_payload()
    first_fields = first_payload["embeds"][0].pop("fields")
    last_fields = last_payload["embeds"][0].pop("fields")

    assert first_payload == last_payload
    assert first_fields[:-1] == last_fields[:-1]
    assert first_fields[-1]["value"] == HEALTH_TIPS[0]
    assert last_fields[-1]["value"] == HEALTH_TIPS[-1]


def test_tip_selector_outside_candidates_rejected():
    with pytest.raises(ValueError):
        run_at(10, tip_selector=lambda tips: "drink coffee")


def test_period_tables_must_cover_every_period():
    with pytest.raises(ValueError, match="evening"):
        NotificationComposer(period_colors={Period.MORNING: 1, Period.AFTERNOON: 2})
    with pytest.raises(ValueError):
        NotificationComposer(greetings={})


def test_presentation_tables_are_substitutable():
    labels = {Period.MORNING: "AM", Period.AFTERNOON: "PM", Period.EVENING: "EVE"}
    _, message = run_at(15, period_labels=labels, checklist=["one"], health_tips=["only tip"])
    assert field_value(message, FIELD_PERIOD) == "PM"
    assert field_value(message, FIELD_CHECKLIST) == "one"
    assert field_value(message, FIELD_TIP) == "only tip"


def test_payload_wire_format():
    _, message = run_at(
        7, 30,
        username="薬リマインダーBot",
        avatar_url="https://example.com/avatar.png",
        thumbnail_url="https://example.com/thumb.png",
    )
    payload = message.to_payload()
    embed = payload["embeds"][0]

    assert payload["username"] == "薬リマインダーBot"
    assert payload["avatar_url"] == "https://example.com/avatar.png"
    assert embed["thumbnail"] == {"url": "https://example.com/thumb.png"}
    assert embed["footer"] == {"text": "健康管理リマインダー"}
    assert embed["timestamp"].startswith("2026-10-17T22:30:00")
    assert isinstance(embed["color"], int)
    assert all(set(field) == {"name", "value", "inline"} for field in embed["fields"])


def test_optional_presentation_keys_omitted():
    ctx = resolve_time_context(datetime(2026, 10, 18, 9, 0, tzinfo=JST))
    payload = compose_notification(ctx, evaluate_schedule(ctx), tip_selector=first_tip).to_payload()

    assert "username" not in payload
    assert "avatar_url" not in payload
    assert "thumbnail" not in payload["embeds"][0]


def test_description_uses_injected_greetings():
    greetings = {Period.MORNING: "gm", Period.AFTERNOON: "good afternoon", Period.EVENING: "ge"}
    _, message = run_at(14, greetings=greetings)
    assert message.embeds[0].description.split("\n") == ["good afternoon", "今日の薬はちゃんと飲みましたか？"]
