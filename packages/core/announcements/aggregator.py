"""
Announcement Aggregator.

Collapses per-recipient delivery records into the logical announcements a
sender intended, for the HR history view.

Rules:
1. Records sharing a batch id form one announcement; a record without a
   batch id is its own announcement (keyed by its record id).
2. Title, body, status, audience, sender and creation time come from the
   first record seen for a key. Delivery time is the latest seen.
3. Scope is the explicit metadata override, else derived from the audience.
4. Recipients are collected (deduplicated by id) only for SPECIFIC scope.
5. Newest announcements first, at most ``history_limit`` of them.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from packages.core.announcements.models import (
    AnnouncementFeed,
    AnnouncementRecipient,
    AnnouncementSender,
    AnnouncementSummary,
    DeliveryRecord,
    NotificationAudience,
    NotificationStatus,
    RecipientScope,
    RecipientSummary,
)

# Raw delivery records fetched per history request.
ANNOUNCEMENT_FETCH_LIMIT = 200
# Logical announcements returned per history request.
ANNOUNCEMENT_HISTORY_LIMIT = 40

ORGANIZATION_LABEL = "Entire organization"
ROLE_LABEL = "Targeted roles"
SINGLE_TEAMMATE_LABEL = "Selected teammate"
MULTIPLE_TEAMMATES_LABEL = "Selected teammates"


@dataclass
class AnnouncementGroup:
    """In-progress accumulator for one logical announcement."""

    id: str
    title: str
    body: str
    audience: NotificationAudience
    status: NotificationStatus
    scope: RecipientScope
    sender: AnnouncementSender
    created_at: datetime
    delivered_at: datetime
    record_count: int = 0
    people: dict[str, AnnouncementRecipient] = field(default_factory=dict)

    @classmethod
    def seed(
        cls, key: str, record: DeliveryRecord, scope: RecipientScope
    ) -> "AnnouncementGroup":
        return cls(
            id=key,
            title=record.title,
            body=record.body,
            audience=record.audience,
            status=record.status,
            scope=scope,
            sender=record.sender,
            created_at=record.created_at,
            delivered_at=record.delivered_at,
        )


# -----------------------------
# Rules
# -----------------------------


def scope_from_audience(audience: NotificationAudience) -> RecipientScope:
    """Derive the recipient scope from a record's audience classifier."""
    if audience == NotificationAudience.ORGANIZATION:
        return RecipientScope.ORGANIZATION
    if audience == NotificationAudience.ROLE:
        return RecipientScope.ROLE
    return RecipientScope.SPECIFIC


def resolve_scope(record: DeliveryRecord) -> RecipientScope:
    """Explicit metadata scope wins over the audience classifier."""
    return record.metadata.scope or scope_from_audience(record.audience)


def grouping_key(record: DeliveryRecord) -> str:
    """Batch id, or the record's own id for unbatched records."""
    return record.metadata.batch_id or record.id


def build_recipient_label(scope: RecipientScope, count: int) -> tuple[str, bool]:
    """
    Build the human-facing recipient label.

    Returns:
        Tuple of (label, show_count).
    """
    if scope == RecipientScope.ORGANIZATION:
        return ORGANIZATION_LABEL, False
    if scope == RecipientScope.ROLE:
        return ROLE_LABEL, False
    return (SINGLE_TEAMMATE_LABEL if count == 1 else MULTIPLE_TEAMMATES_LABEL), True


# -----------------------------
# Aggregator
# -----------------------------


class AnnouncementAggregator:
    """
    Groups delivery records into announcement summaries.

    Pure read-time fold: the input records are never mutated, and the same
    input always yields the same output.
    """

    def __init__(self, history_limit: int = ANNOUNCEMENT_HISTORY_LIMIT):
        """
        Initialize the aggregator.

        Args:
            history_limit: Maximum number of announcements to return.
        """
        self._history_limit = history_limit

    def group(self, records: Iterable[DeliveryRecord]) -> list[AnnouncementGroup]:
        """Fold records into groups, in first-seen order."""
        groups: dict[str, AnnouncementGroup] = {}

        for record in records:
            key = grouping_key(record)
            scope = resolve_scope(record)

            group = groups.get(key)
            if group is None:
                group = AnnouncementGroup.seed(key, record, scope)
                groups[key] = group
            elif record.delivered_at > group.delivered_at:
                group.delivered_at = record.delivered_at

            group.record_count += 1

            if scope == RecipientScope.SPECIFIC and record.target is not None:
                group.people[record.target.id] = record.target

        return list(groups.values())

    def summarize(self, records: Iterable[DeliveryRecord]) -> list[AnnouncementSummary]:
        """Group, sort newest first, truncate, and convert to summaries."""
        groups = sorted(
            self.group(records),
            key=lambda group: group.delivered_at,
            reverse=True,
        )
        return [self._to_summary(group) for group in groups[: self._history_limit]]

    def build_feed(self, records: Iterable[DeliveryRecord]) -> AnnouncementFeed:
        summaries = self.summarize(records)
        return AnnouncementFeed(announcements=summaries, total=len(summaries))

    @staticmethod
    def _to_summary(group: AnnouncementGroup) -> AnnouncementSummary:
        label, show_count = build_recipient_label(group.scope, group.record_count)
        is_specific = group.scope == RecipientScope.SPECIFIC

        return AnnouncementSummary(
            id=group.id,
            title=group.title,
            body=group.body,
            status=group.status,
            audience=group.audience,
            delivered_at=group.delivered_at,
            created_at=group.created_at,
            sender=group.sender,
            recipients=RecipientSummary(
                scope=group.scope,
                label=label,
                count=group.record_count if show_count else None,
                people=list(group.people.values()) if is_specific else [],
            ),
        )


def aggregate_announcements(
    records: Iterable[DeliveryRecord],
    history_limit: int = ANNOUNCEMENT_HISTORY_LIMIT,
) -> AnnouncementFeed:
    """Convenience wrapper around AnnouncementAggregator.build_feed."""
    return AnnouncementAggregator(history_limit=history_limit).build_feed(records)
