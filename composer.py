"""Notification composition for the Medication Reminder.

Builds the webhook message from a TimeContext and a ScheduleEvaluation.
Everything is deterministic except the health tip, which is drawn through
an injectable selector (``random.choice`` in production).
"""

import random
from typing import Callable, Mapping, Optional, Sequence

from dose_schedule import DoseSlot, ScheduleEvaluation
from logger_config import setup_logger
from schemas import Embed, EmbedField, EmbedFooter, EmbedThumbnail, WebhookMessage
from time_context import GREETINGS, Period, TimeContext, greeting_for

logger = setup_logger(__name__)

TipSelector = Callable[[Sequence[str]], str]

TITLE = "💊 薬の服薬確認"
QUESTION = "今日の薬はちゃんと飲みましたか？"
FOOTER_TEXT = "健康管理リマインダー"

DUE_MARK = "✅"
PENDING_MARK = "⏳"
UPCOMING_MARK = "▶"

FIELD_DATETIME = "📅 日時"
FIELD_PERIOD = "🕐 時間帯"
FIELD_SCHEDULE = "📋 今日の服薬スケジュール"
FIELD_UPCOMING = "⏰ 次の服薬予定"
FIELD_CHECKLIST = "📝 確認事項"
FIELD_TIP = "💡 健康のヒント"

PERIOD_LABELS: Mapping[Period, str] = {
    Period.MORNING: "朝",
    Period.AFTERNOON: "昼",
    Period.EVENING: "夜",
}

PERIOD_COLORS: Mapping[Period, int] = {
    Period.MORNING: 0xFFD700,
    Period.AFTERNOON: 0x3498DB,
    Period.EVENING: 0x9B59B6,
}

CHECKLIST = (
    "☐ 朝の薬を飲みましたか？",
    "☐ 昼の薬を飲みましたか？",
    "☐ 夜の薬を飲みましたか？",
    "☐ 寝る前の薬を飲みましたか？",
)

HEALTH_TIPS = (
    "💧 薬はコップ1杯の水かぬるま湯で飲みましょう。",
    "⏰ 毎日同じ時間に飲むと、飲み忘れを防げます。",
    "📝 飲み忘れに気づいたら、自己判断せず医師や薬剤師に相談しましょう。",
    "🍽️ 食後の薬は、食事のあと30分以内を目安に飲みましょう。",
)


def _check_covers_periods(name: str, table: Mapping[Period, object]) -> None:
    missing = [period.value for period in Period if period not in table]
    if missing:
        raise ValueError(f"{name} has no entry for period(s): {', '.join(missing)}")


def _slot_line(mark: str, slot: DoseSlot) -> str:
    return f"{mark} {slot.time} {slot.label}"


class NotificationComposer:
    """Composes the reminder message.

    Presentation tables are plain immutable data and can be swapped in tests.
    Every per-period table must cover every Period; there is no default.
    """

    def __init__(
        self,
        tip_selector: Optional[TipSelector] = None,
        username: Optional[str] = None,
        avatar_url: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
        footer_icon_url: Optional[str] = None,
        period_labels: Mapping[Period, str] = PERIOD_LABELS,
        period_colors: Mapping[Period, int] = PERIOD_COLORS,
        greetings: Mapping[Period, str] = GREETINGS,
        checklist: Sequence[str] = CHECKLIST,
        health_tips: Sequence[str] = HEALTH_TIPS,
    ):
        _check_covers_periods("period_labels", period_labels)
        _check_covers_periods("period_colors", period_colors)
        _check_covers_periods("greetings", greetings)
        if not health_tips:
            raise ValueError("health_tips must not be empty")

        self.tip_selector = tip_selector or random.choice
        self.username = username
        self.avatar_url = avatar_url
        self.thumbnail_url = thumbnail_url
        self.footer_icon_url = footer_icon_url
        self.period_labels = period_labels
        self.period_colors = period_colors
        self.greetings = greetings
        self.checklist = tuple(checklist)
        self.health_tips = tuple(health_tips)

    def pick_tip(self) -> str:
        tip = self.tip_selector(self.health_tips)
        if tip not in self.health_tips:
            raise ValueError(f"tip_selector returned a value outside health_tips: {tip!r}")
        return tip

    def build_fields(self, ctx: TimeContext, evaluation: ScheduleEvaluation) -> list:
        """Build the embed fields in wire order.

        The upcoming field is omitted when nothing is upcoming.
        """
        fields = [
            EmbedField(
                name=FIELD_DATETIME,
                value=f"{ctx.weekday_label} {ctx.formatted_datetime}",
                inline=True,
            ),
            EmbedField(name=FIELD_PERIOD, value=self.period_labels[ctx.period], inline=True),
            EmbedField(
                name=FIELD_SCHEDULE,
                value="\n".join(
                    _slot_line(DUE_MARK if dose.due else PENDING_MARK, dose.slot)
                    for dose in evaluation.doses
                ),
                inline=False,
            ),
        ]

        if evaluation.upcoming:
            fields.append(EmbedField(
                name=FIELD_UPCOMING,
                value="\n".join(_slot_line(UPCOMING_MARK, slot) for slot in evaluation.upcoming),
                inline=False,
            ))

        fields.append(EmbedField(name=FIELD_CHECKLIST, value="\n".join(self.checklist), inline=False))
        fields.append(EmbedField(name=FIELD_TIP, value=self.pick_tip(), inline=False))
        return fields

    def compose(self, ctx: TimeContext, evaluation: ScheduleEvaluation) -> WebhookMessage:
        """Compose the webhook message for one run.

        Args:
            ctx: Resolved time context
            evaluation: Evaluated dose schedule

        Returns:
            WebhookMessage with a single embed
        """
        fields = self.build_fields(ctx, evaluation)
        logger.info(
            f"Composing {ctx.period.value} reminder for {ctx.formatted_datetime} "
            f"({len(evaluation.upcoming)} upcoming dose(s))"
        )

        embed = Embed(
            title=TITLE,
            description=f"{greeting_for(ctx.period, self.greetings)}\n{QUESTION}",
            color=self.period_colors[ctx.period],
            thumbnail=EmbedThumbnail(url=self.thumbnail_url) if self.thumbnail_url else None,
            fields=fields,
            footer=EmbedFooter(text=FOOTER_TEXT, icon_url=self.footer_icon_url),
            timestamp=ctx.instant,
        )

        return WebhookMessage(username=self.username, avatar_url=self.avatar_url, embeds=[embed])


def compose_notification(
    ctx: TimeContext,
    evaluation: ScheduleEvaluation,
    tip_selector: Optional[TipSelector] = None,
) -> WebhookMessage:
    """Compose with the default presentation tables."""
    return NotificationComposer(tip_selector=tip_selector).compose(ctx, evaluation)
