"""
Overlap layout for day and week timelines.

Events that overlap in time are placed side by side. The algorithm:

1. Sort events by start, longer events first on ties.
2. Build an overlap graph (adjacency list over sorted indices).
3. Split it into connected components (clusters) with a breadth-first walk.
4. Pack each cluster greedily into the leftmost column whose last event has
   already ended.

Column counts are per cluster: an event that overlaps nothing always gets
the full width, however crowded the rest of the day is. Overlap is decided
on absolute instants, so the timezone only affects vertical positions.
"""

import logging
from collections import deque
from typing import Any, Dict, Iterable, List, Optional

from algorithms.availability.interval_math import overlaps
from algorithms.layout.position_calculator import calculate_event_position, layout_defaults
from apps.scheduleapp.records import ScheduleEvent

logger = logging.getLogger(__name__)


def build_overlap_graph(events: List[ScheduleEvent]) -> List[List[int]]:
    """
    Adjacency list of the strict overlap relation between events.

    Args:
        events: Events with valid dates

    Returns:
        adjacency[i] lists the indices of every event overlapping events[i]
    """
    adjacency = [[] for _ in events]
    for i, first in enumerate(events):
        for j in range(i + 1, len(events)):
            second = events[j]
            if overlaps(first.start, first.end, second.start, second.end):
                adjacency[i].append(j)
                adjacency[j].append(i)
    return adjacency


def find_clusters(adjacency: List[List[int]]) -> List[List[int]]:
    """
    Connected components of a graph, each listed in ascending index order.
    """
    visited = [False] * len(adjacency)
    clusters = []

    for root in range(len(adjacency)):
        if visited[root]:
            continue

        visited[root] = True
        queue = deque([root])
        cluster = []
        while queue:
            node = queue.popleft()
            cluster.append(node)
            for neighbour in adjacency[node]:
                if not visited[neighbour]:
                    visited[neighbour] = True
                    queue.append(neighbour)

        clusters.append(sorted(cluster))

    return clusters


def assign_columns(events: List[ScheduleEvent], cluster: List[int]) -> Dict[int, int]:
    """
    Greedy leftmost-fit column packing of one cluster.

    Args:
        events: All sorted events
        cluster: Indices of the cluster members

    Returns:
        Mapping of event index to 0-based column
    """
    members = sorted(cluster, key=lambda index: (events[index].start, index))
    columns: List[List[int]] = []
    placement = {}

    for index in members:
        candidate = events[index]
        for column_number, column in enumerate(columns):
            if candidate.start >= events[column[-1]].end:
                column.append(index)
                placement[index] = column_number
                break
        else:
            columns.append([index])
            placement[index] = len(columns) - 1

    return placement


def calculate_events_with_layout(
    events: Iterable[Any],
    slot_minutes: Optional[int] = None,
    start_hour: Optional[int] = None,
    timezone_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Calculate position and column of every event of a day.

    Args:
        events: Event records for one day
        slot_minutes: Minutes per time slot row
        start_hour: First visible hour of the timeline
        timezone_id: Calendar timezone used for vertical positions

    Returns:
        List of layout dicts, ordered by start (longest first on ties):
        {
            'event': original event record,
            'position': {'top': float, 'height': float},
            'column': int,
            'total_columns': int  # columns used by the event's cluster
        }
    """
    slot_minutes, start_hour, timezone_id = layout_defaults(slot_minutes, start_hour, timezone_id)

    normalized = []
    for record in events:
        event = ScheduleEvent.from_record(record)
        if not event.has_valid_dates:
            logger.warning(f"Leaving event {event.id} out of the layout: unparseable dates")
            continue
        normalized.append(event)

    if not normalized:
        return []

    normalized.sort(key=lambda event: (event.start, -(event.end - event.start)))

    adjacency = build_overlap_graph(normalized)
    clusters = find_clusters(adjacency)
    logger.debug(f"Laid out {len(normalized)} events in {len(clusters)} clusters")

    layout = [None] * len(normalized)
    for cluster in clusters:
        placement = assign_columns(normalized, cluster)
        total_columns = max(placement.values()) + 1
        for index in cluster:
            event = normalized[index]
            layout[index] = {
                "event": event.source,
                "position": calculate_event_position(event, slot_minutes, start_hour, timezone_id),
                "column": placement[index],
                "total_columns": total_columns,
            }

    return layout
