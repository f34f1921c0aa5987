"""
Draw-sequence tree.

Chains the hand-support enumerator and the probability assigner turn
over turn. Each node holds a residual deck, the running hand tally and
the exact probability of its path; its children are every draw
consistent with the residual deck, weighted by the conditional
probability of that draw. For single-card steps this is N_i / N over the
residual deck.

Nodes are generated lazily during traversal and never merged: two paths
reaching the same residual deck and hand stay separate leaves, and
probability mass is summed by statistic only when a distribution is
requested.
"""

import logging
from collections.abc import Iterator
from fractions import Fraction

from manaforge.analysis.probability import HandStatistic, hand_probability
from manaforge.analysis.support import check_draw_size, enumerate_hands
from manaforge.models.budget import EnumerationBudget
from manaforge.models.deck import DeckMultiset
from manaforge.models.failure import DomainError
from manaforge.models.tree import DrawNode, TurnDistribution

logger = logging.getLogger(__name__)


class DrawTree:
    """
    Lazily expanded tree of draw sequences from one deck.

    Step 1 draws ``opening_hand_size`` cards when it is positive, every
    other step draws ``draws_per_turn`` cards. A node's ``turn`` is the
    number of steps taken from the root.
    """

    def __init__(
        self,
        deck: DeckMultiset,
        draws_per_turn: int = 1,
        opening_hand_size: int = 0,
        budget: EnumerationBudget | None = None,
    ):
        if draws_per_turn < 1:
            raise DomainError(
                message="Each turn must draw at least one card",
                detail=f"draws_per_turn={draws_per_turn}",
            )
        if opening_hand_size < 0:
            raise DomainError(
                message="Opening hand size cannot be negative",
                detail=f"opening_hand_size={opening_hand_size}",
            )
        self.deck = deck
        self.draws_per_turn = draws_per_turn
        self.opening_hand_size = opening_hand_size
        self.budget = budget or EnumerationBudget()
        self.root = DrawNode(
            turn=0,
            residual_deck=deck,
            hand=(0,) * len(deck.counts),
            probability=Fraction(1),
        )

    def step_size(self, turn: int) -> int:
        """Cards drawn on the step leaving a node at ``turn``."""
        if turn == 0 and self.opening_hand_size:
            return self.opening_hand_size
        return self.draws_per_turn

    def cards_drawn_by(self, turn: int) -> int:
        """Total cards drawn on any path of depth ``turn``."""
        return sum(self.step_size(t) for t in range(turn))

    def children(self, node: DrawNode) -> Iterator[DrawNode]:
        """
        Expand one step below ``node``.

        Raises:
            DomainError: If the step draws more cards than remain
        """
        residual = node.residual_deck
        for vector in enumerate_hands(residual, self.step_size(node.turn), self.budget):
            yield DrawNode(
                turn=node.turn + 1,
                residual_deck=residual.draw(vector),
                hand=tuple(h + k for h, k in zip(node.hand, vector, strict=True)),
                probability=node.probability * hand_probability(residual, vector),
            )

    def walk(self, max_turn: int) -> Iterator[DrawNode]:
        """
        Depth-first traversal of every node down to ``max_turn``.

        Raises:
            DomainError: If the deck runs out before max_turn
            ResourceError: If depth or visited-node bounds are exceeded
        """
        if max_turn < 0:
            raise DomainError(message="Turn cannot be negative", detail=f"turn={max_turn}")
        self.budget.check_tree_depth(max_turn)
        check_draw_size(self.deck, self.cards_drawn_by(max_turn))

        visited = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            visited += 1
            self.budget.check_tree_nodes(visited)
            yield node
            if node.turn < max_turn:
                stack.extend(self.children(node))

        logger.debug("Visited %d nodes to depth %d", visited, max_turn)

    def leaves(self, turn: int) -> Iterator[DrawNode]:
        """All nodes at depth ``turn``."""
        return (node for node in self.walk(turn) if node.turn == turn)

    def distribution(self, turn: int, statistic: HandStatistic) -> TurnDistribution:
        """
        Aggregate leaf probabilities at ``turn`` by a hand statistic.

        Args:
            turn: Target depth
            statistic: Function of the hand tally {category: count}

        Returns:
            TurnDistribution whose masses sum to exactly 1
        """
        result = TurnDistribution(turn=turn)
        for leaf in self.leaves(turn):
            result.add(statistic(self.deck.tally(leaf.hand)), leaf.probability)
            result.leaf_count += 1
        logger.info(
            "Turn %d distribution: %d leaves, %d statistic values",
            turn,
            result.leaf_count,
            len(result.masses),
        )
        return result

    def distributions(self, max_turn: int, statistic: HandStatistic) -> list[TurnDistribution]:
        """Distributions for every depth 0..max_turn in one traversal."""
        results = [TurnDistribution(turn=t) for t in range(max_turn + 1)]
        for node in self.walk(max_turn):
            bucket = results[node.turn]
            bucket.add(statistic(self.deck.tally(node.hand)), node.probability)
            bucket.leaf_count += 1
        return results


def turn_draw_count(turn: int, opening_hand_size: int = 7, on_play: bool = True) -> int:
    """
    Cards seen by game turn ``turn``.

    Turn 1 on the play has no draw step; on the draw every turn draws.
    """
    if turn < 1:
        raise DomainError(message="Game turns start at 1", detail=f"turn={turn}")
    draws = turn - 1 if on_play else turn
    return opening_hand_size + draws


def statistic_by_turn(
    deck: DeckMultiset,
    turn: int,
    statistic: HandStatistic,
    opening_hand_size: int = 7,
    on_play: bool = True,
    budget: EnumerationBudget | None = None,
) -> TurnDistribution:
    """
    Distribution of a hand statistic at game turn ``turn``.

    Step 1 draws the opening hand (plus the turn-1 draw when on the
    draw); each later turn draws one card.
    """
    first_step = turn_draw_count(1, opening_hand_size, on_play)
    if first_step < 1:
        raise DomainError(
            message="Turn 1 must see at least one card",
            detail=f"opening_hand_size={opening_hand_size}, on_play={on_play}",
        )
    tree = DrawTree(deck, draws_per_turn=1, opening_hand_size=first_step, budget=budget)
    return tree.distribution(turn, statistic)
