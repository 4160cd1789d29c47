"""Shortest link paths between notes."""

from collections import deque

from insightgraph.models.note import Note


def build_adjacency(notes: list[Note]) -> dict[str, list[str]]:
    """Map each note ID to the targets of its outgoing links."""
    return {note.id: note.link_targets() for note in notes}


def shortest_path(start_id: str, end_id: str, notes: list[Note]) -> list[str]:
    """
    Find the minimum-hop path between two notes.

    Breadth-first search over outgoing links. Link strength is ignored, every
    hop counts the same.

    Args:
        start_id: Note to start from
        end_id: Note to reach
        notes: Notes making up the graph

    Returns:
        Note IDs from start to end inclusive, or an empty list if either note
        is unknown or end is unreachable
    """
    adjacency = build_adjacency(notes)
    if start_id not in adjacency or end_id not in adjacency:
        return []

    queue: deque[list[str]] = deque([[start_id]])
    visited = {start_id}

    while queue:
        path = queue.popleft()
        node = path[-1]
        if node == end_id:
            return path

        for neighbor in adjacency.get(node, []):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(path + [neighbor])

    return []
