"""Usage modal — cost and token dashboard over the usage log."""

from __future__ import annotations

from moxie_companion.l1_entities.usage import UsageRecord, UsageSummary
from moxie_companion.l4_frameworks_and_drivers.widgets.info_modal import InfoModal
from moxie_companion.l4_frameworks_and_drivers.widgets.status_bar import format_cost

RECENT_ROWS = 15


def render_usage_markdown(summary: UsageSummary, records: list[UsageRecord]) -> str:
    lines = [
        '### Spend',
        '| Today | Last 7 days | Last 30 days |',
        '|-------|-------------|--------------|',
        f'| {format_cost(summary.today_cost)} | {format_cost(summary.week_cost)} | {format_cost(summary.month_cost)} |',
        '',
        '### Activity',
        f'- **Total tokens:** {summary.total_tokens:,}',
        f'- **Sessions:** {summary.total_sessions}',
        f'- **Most used model:** {summary.most_used_model or "—"}',
        f'- **Most active child:** {summary.most_active_child or "—"}',
        '',
    ]
    recent = sorted(records, key=lambda r: r.timestamp, reverse=True)[:RECENT_ROWS]
    if recent:
        lines.extend(
            [
                '### Recent',
                '| When | Child | Feature | Model | Tokens | Cost |',
                '|------|-------|---------|-------|--------|------|',
            ]
        )
        lines.extend(
            f'| {r.timestamp:%m/%d %H:%M} | {r.child_id or "—"} | {r.feature} | {r.model} | {r.tokens} | {format_cost(r.cost)} |'
            for r in recent
        )
    else:
        lines.append('_No usage recorded yet._')
    return '\n'.join(lines)


class UsageModal(InfoModal):
    """Aggregate spend plus the most recent usage records."""

    TITLE_TEXT = 'Usage & Cost'

    def __init__(self, summary: UsageSummary, records: list[UsageRecord], **kwargs) -> None:
        super().__init__(render_usage_markdown(summary, records), **kwargs)
