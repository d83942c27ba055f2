"""Use case: record AI usage and aggregate it for the usage dashboard."""

from __future__ import annotations

import csv
import logging
from collections import Counter
from datetime import datetime, timedelta
from pathlib import Path

from moxie_companion.l1_entities.usage import UsageRecord, UsageSummary
from moxie_companion.l2_use_cases.ports.usage_repository import UsageRepository

log = logging.getLogger('moxie.usage')

CSV_HEADER = ['Date', 'Time', 'Child', 'Feature', 'Model', 'Tokens', 'Cost', 'Duration']


class UsageLog:
    """Appends usage records and answers dashboard queries over them."""

    def __init__(self, repository: UsageRepository) -> None:
        self._repo = repository

    def record(
        self,
        child_id: str,
        feature: str,
        model: str,
        tokens: int,
        **kwargs,
    ) -> UsageRecord:
        rec = UsageRecord.create(child_id=child_id, feature=feature, model=model, tokens=tokens, **kwargs)
        self._repo.append(rec)
        log.info('Usage: %s/%s model=%s tokens=%d cost=$%.5f', rec.child_id, rec.feature, model, tokens, rec.cost)
        return rec

    def records(
        self,
        child_id: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[UsageRecord]:
        """Stored records, optionally narrowed to one child and/or an inclusive date range."""
        result = []
        for rec in self._repo.load_all():
            if child_id and rec.child_id != child_id:
                continue
            if start is not None and rec.timestamp < start:
                continue
            if end is not None and rec.timestamp > end:
                continue
            result.append(rec)
        return result

    def summary(self, now: datetime | None = None, child_id: str | None = None) -> UsageSummary:
        return summarize(self.records(child_id=child_id), now=now)

    def prune(self, older_than_days: int = 90, now: datetime | None = None) -> int:
        """Drop records older than the cutoff. Returns how many were removed."""
        cutoff = (now or datetime.now()) - timedelta(days=older_than_days)
        records = self._repo.load_all()
        kept = [r for r in records if r.timestamp >= cutoff]
        removed = len(records) - len(kept)
        if removed:
            self._repo.replace_all(kept)
            log.info('Pruned %d usage records older than %s', removed, cutoff.date())
        return removed

    def export_csv(self, path: Path, records: list[UsageRecord] | None = None) -> Path:
        rows = records if records is not None else self.records()
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for rec in rows:
                writer.writerow(
                    [
                        rec.timestamp.strftime('%Y-%m-%d'),
                        rec.timestamp.strftime('%H:%M:%S'),
                        rec.child_id,
                        rec.feature,
                        rec.model,
                        rec.tokens,
                        f'{rec.cost:.6f}',
                        rec.duration_seconds,
                    ]
                )
        log.info('Exported %d usage records to %s', len(rows), path)
        return path


def summarize(records: list[UsageRecord], now: datetime | None = None) -> UsageSummary:
    """Aggregate dashboard figures. Week and month are rolling 7- and 30-day windows."""
    now = now or datetime.now()
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)

    models = Counter(r.model for r in records if r.model)
    children = Counter(r.child_id for r in records if r.child_id)

    return UsageSummary(
        today_cost=sum(r.cost for r in records if r.timestamp.date() == now.date()),
        week_cost=sum(r.cost for r in records if r.timestamp >= week_ago),
        month_cost=sum(r.cost for r in records if r.timestamp >= month_ago),
        total_tokens=sum(r.tokens for r in records),
        total_sessions=len({r.session_id for r in records}),
        most_used_model=models.most_common(1)[0][0] if models else '',
        most_active_child=children.most_common(1)[0][0] if children else '',
    )
