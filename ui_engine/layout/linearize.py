"""
Flattening of backward-linked box trees.

Boxes only point at their parent and their previous sibling. The linearizer
walks those links from every box it is handed and produces a list in which
each parent comes before its children and each child before its later
siblings, which is the order both layout passes depend on.
"""

import itertools
import logging
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .box import Box, EntityId, RectShape
from .errors import InconsistentSibling, MissingRoot, MultipleRoots, UnknownBox

logger = logging.getLogger(__name__)

BoxLookup = Callable[[EntityId], Optional[Box]]

# Shared by every linearizer; stamps only ever increase
_run_stamps = itertools.count(1)


class TreeLinearizer:
    """
    Orders a box tree parents-first without recursion.

    Every box starts a run that climbs through previous siblings and then the
    parent until it reaches the root or a box placed by an earlier run. The
    run is reversed and appended, so each box is placed exactly once.
    """

    def __init__(self):
        self.order: List[Box] = []
        self.root_id: Optional[EntityId] = None

    def linearize(self, entities: Iterable[Tuple[EntityId, Box]], lookup: BoxLookup) -> List[Box]:
        """
        Build the parents-first ordering of all boxes.

        Args:
            entities: Every (entity id, box) pair, in any order
            lookup: Resolves an entity id to its box

        Returns:
            List[Box]: Boxes ordered parents before children, root first

        Raises:
            TreeError: If the links do not describe a single well-formed tree
        """
        order = self.order
        order.clear()
        self.root_id = None

        first_run = next(_run_stamps)
        run = first_run - 1
        runs = 0
        claimed_siblings: Set[EntityId] = set()
        first_children: Set[EntityId] = set()

        for eid, box in entities:
            if box._visited >= first_run:
                continue

            run = first_run if run < first_run else next(_run_stamps)
            runs += 1
            start = len(order)
            cur_id, cur = eid, box
            cur._visited = run
            order.append(cur)

            while True:
                if cur.sibling is not None:
                    next_id = cur.sibling
                    if next_id in claimed_siblings:
                        raise InconsistentSibling(
                            f"Box {next_id} is the previous sibling of more than one box", next_id)
                    claimed_siblings.add(next_id)
                    nxt = self._resolve(lookup, next_id, cur_id, "sibling")
                    if nxt.parent != cur.parent:
                        raise InconsistentSibling(
                            f"Box {cur_id} has parent {cur.parent} but its previous sibling "
                            f"{next_id} has parent {nxt.parent}", cur_id)
                elif cur.parent is not None:
                    next_id = cur.parent
                    if next_id in first_children:
                        raise InconsistentSibling(
                            f"Box {next_id} has more than one first child (found {cur_id})", cur_id)
                    first_children.add(next_id)
                    nxt = self._resolve(lookup, next_id, cur_id, "parent")
                else:
                    if self.root_id is not None:
                        raise MultipleRoots(
                            f"Boxes {self.root_id} and {cur_id} both have no parent", cur_id)
                    self.root_id = cur_id
                    break

                if nxt._visited >= first_run:
                    if nxt._visited == run:
                        # The run looped back onto itself
                        if cur.sibling is not None:
                            raise InconsistentSibling(
                                f"Sibling chain through box {cur_id} loops back to box {next_id}", next_id)
                        raise MissingRoot(
                            f"Parents of box {cur_id} loop back to box {next_id} without reaching a root",
                            next_id)
                    break

                nxt._visited = run
                order.append(nxt)
                cur_id, cur = next_id, nxt

            # Parents and earlier siblings were appended last
            order[start:] = order[start:][::-1]

        if order and self.root_id is None:
            raise MissingRoot(f"None of the {len(order)} boxes is a root")

        logger.debug(f"Linearized {len(order)} boxes in {runs} runs")
        return order

    @staticmethod
    def _resolve(lookup: BoxLookup, eid: EntityId, referrer: EntityId, relation: str) -> Box:
        box = lookup(eid)
        if box is None:
            raise UnknownBox(f"Box {referrer} names {eid} as its {relation}, which is not a box", referrer)
        return box


def reset_boxes(order: Iterable[Box]) -> None:
    """Zero the shape and scratch totals of every box before measuring."""
    for box in order:
        box.shape = RectShape()
        box._grow_total = 0.0
        box._extra = 0.0
        box._offset = 0.0
        box._content = 0.0
