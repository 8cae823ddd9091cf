"""Frontier (open set) containers for the A* step function.

Both containers map a state to the arena index of the node currently
representing it, and both break priority ties by frontier slot: the slot a
state received when it first entered the frontier. Replacing the node of a
state keeps its slot, so the two containers pick the same node every step.
"""

import heapq
from typing import Dict, Hashable, List, Optional, Tuple


class ScanFrontier:
    """Unordered frontier scanned linearly for the minimum priority.

    Suitable for small to medium state spaces. Dict insertion order provides
    the slot order, and rebinding an existing key keeps its position.
    """

    def __init__(self) -> None:
        self._entries: Dict[Hashable, Tuple[float, int]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, state: Hashable) -> bool:
        return state in self._entries

    def get(self, state: Hashable) -> Optional[int]:
        entry = self._entries.get(state)
        return entry[1] if entry is not None else None

    def push(self, state: Hashable, index: int, priority: float) -> None:
        self._entries[state] = (priority, index)

    def replace(self, state: Hashable, index: int, priority: float) -> None:
        if state not in self._entries:
            raise KeyError(state)
        self._entries[state] = (priority, index)

    def pop(self) -> int:
        """Remove and return the index of the lowest-priority entry."""
        if not self._entries:
            raise IndexError("pop from empty frontier")

        best_state = None
        best_priority = 0.0
        found = False
        for state, (priority, _) in self._entries.items():
            # Strict comparison keeps the first encountered entry on ties
            if not found or priority < best_priority:
                best_state = state
                best_priority = priority
                found = True

        return self._entries.pop(best_state)[1]


class HeapFrontier:
    """Binary-heap frontier with lazy invalidation of superseded entries.

    Heap entries are ``(priority, slot, index)``. A replacement pushes a new
    entry under the same slot; the entry it supersedes stays in the heap and
    is discarded when it surfaces.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, int]] = []
        self._live: Dict[Hashable, Tuple[int, int]] = {}  # state -> (slot, index)
        self._slot_states: Dict[int, Hashable] = {}
        self._next_slot = 0

    def __len__(self) -> int:
        return len(self._live)

    def __contains__(self, state: Hashable) -> bool:
        return state in self._live

    def get(self, state: Hashable) -> Optional[int]:
        entry = self._live.get(state)
        return entry[1] if entry is not None else None

    def push(self, state: Hashable, index: int, priority: float) -> None:
        slot = self._next_slot
        self._next_slot += 1
        self._live[state] = (slot, index)
        self._slot_states[slot] = state
        heapq.heappush(self._heap, (priority, slot, index))

    def replace(self, state: Hashable, index: int, priority: float) -> None:
        slot, _ = self._live[state]
        self._live[state] = (slot, index)
        heapq.heappush(self._heap, (priority, slot, index))

    def pop(self) -> int:
        """Remove and return the index of the lowest-priority live entry."""
        while self._heap:
            _, slot, index = heapq.heappop(self._heap)
            if slot not in self._slot_states:
                continue  # state already popped
            state = self._slot_states[slot]
            if self._live[state][1] != index:
                continue  # superseded by a replacement
            del self._live[state]
            del self._slot_states[slot]
            return index
        raise IndexError("pop from empty frontier")

    def stale_entries(self) -> int:
        """Number of superseded entries still sitting in the heap."""
        return len(self._heap) - len(self._live)


FRONTIERS = {
    'scan': ScanFrontier,
    'heap': HeapFrontier,
}


def create_frontier(name: str = 'scan'):
    """Create a frontier container by name ('scan' or 'heap')."""
    try:
        return FRONTIERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown frontier '{name}', expected one of {sorted(FRONTIERS)}"
        ) from None
