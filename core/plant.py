"""
Glitchbloom — Plant Growth Model

Incrementally grows a binary branching structure. Each branch extends from
its start point toward a fixed end point as its growth value rises from 0
to 1; when it finishes it splits into two children that start from its end.

The branch collection is append-only: a branch's index in
PlantSystem.branches is a stable handle and nothing is ever pruned. Children
copy their parent's end point instead of referencing the parent.

Usage:
    plant = PlantSystem(origin=(320, 480))
    for _ in range(300):
        plant.advance()
    for branch in plant.branches:
        ...
"""

import logging
import math

import numpy as np

from core.safety import validate_max_depth, validate_growth_rate

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5
DEFAULT_GROWTH_RATE = 0.02

ROOT_LENGTH = 100.0        # Length of a depth-0 branch
TIP_LENGTH = 20.0          # Length at depth == max_depth
SPLIT_ANGLE = math.pi / 4  # Each child turns this far from its parent
ANGLE_JITTER = 0.2         # Uniform +/- radians added to each child angle
UP = -math.pi / 2          # Screen space, y grows downward
_EPSILON = 1e-9


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class Branch:
    """One segment of the plant.

    start, end, depth and angle are fixed at creation; growth is the only
    field that changes afterwards (plus the internal spawn marker).
    """
    __slots__ = ('_start', '_end', '_depth', '_angle', 'growth', 'spawned')

    def __init__(self, start, end, depth: int, angle: float):
        self._start = (float(start[0]), float(start[1]))
        self._end = (float(end[0]), float(end[1]))
        self._depth = int(depth)
        self._angle = float(angle)
        self.growth = 0.0
        self.spawned = False

    @property
    def start(self) -> tuple:
        return self._start

    @property
    def end(self) -> tuple:
        return self._end

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def length(self) -> float:
        return math.hypot(self._end[0] - self._start[0], self._end[1] - self._start[1])

    @property
    def current_end(self) -> tuple:
        """Visible endpoint: start at growth 0, end at growth 1."""
        return (lerp(self._start[0], self._end[0], self.growth),
                lerp(self._start[1], self._end[1], self.growth))

    def __repr__(self) -> str:
        return (f"Branch(depth={self._depth}, {self._start} -> {self._end}, "
                f"growth={self.growth:.2f})")


class PlantSystem:
    """Owns the branch arena and its growth/spawn rules.

    Args:
        max_depth: Depth bound. Branches at max_depth - 1 or deeper are leaves.
        growth_rate: Default growth added per advance() call.
        origin: (x, y) root anchor used when advance() creates the root lazily.
        root_angle: Root direction in radians (default straight up).
        rng: np.random.RandomState for angle jitter. None = fresh unseeded state.

    Raises:
        SafetyError: If max_depth < 1 or growth_rate is negative.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH,
                 growth_rate: float = DEFAULT_GROWTH_RATE,
                 origin: tuple = (0.0, 0.0), root_angle: float = UP,
                 rng: np.random.RandomState | None = None):
        self.max_depth = validate_max_depth(max_depth)
        self.growth_rate = validate_growth_rate(growth_rate)
        self.origin = (float(origin[0]), float(origin[1]))
        self.root_angle = float(root_angle)
        self.rng = rng if rng is not None else np.random.RandomState()
        self.branches: list[Branch] = []

    # --- Construction ---

    def branch_length(self, depth: int) -> float:
        """Linear map of depth 0..max_depth onto ROOT_LENGTH..TIP_LENGTH."""
        return lerp(ROOT_LENGTH, TIP_LENGTH, depth / self.max_depth)

    def generate_branch(self, x: float, y: float, angle: float, depth: int) -> Branch:
        length = self.branch_length(depth)
        end = (x + math.cos(angle) * length, y + math.sin(angle) * length)
        return Branch((x, y), end, depth, angle)

    def spawn_root(self, x: float, y: float, angle: float = UP) -> Branch:
        """Create the depth-0 branch. Does nothing if a root already exists."""
        if self.branches:
            return self.branches[0]
        root = self.generate_branch(x, y, angle, 0)
        self.branches.append(root)
        logger.debug("Spawned root at (%.1f, %.1f), angle %.3f", x, y, angle)
        return root

    def _spawn_children(self, branch: Branch) -> list[Branch]:
        x, y = branch.end
        depth = branch.depth + 1
        children = []
        for turn in (-SPLIT_ANGLE, SPLIT_ANGLE):
            angle = branch.angle + turn + self.rng.uniform(-ANGLE_JITTER, ANGLE_JITTER)
            children.append(self.generate_branch(x, y, angle, depth))
        branch.spawned = True
        return children

    # --- Growth ---

    def advance(self, growth_rate: float | None = None) -> int:
        """Grow every unfinished branch by one step.

        Creates the root on the first call. Branches spawned during this call
        start growing on the next one.

        Args:
            growth_rate: Increment for this step. None = self.growth_rate.

        Returns:
            Number of branches created by this call.
        """
        rate = self.growth_rate if growth_rate is None else validate_growth_rate(growth_rate)

        created = 0
        if not self.branches:
            self.spawn_root(self.origin[0], self.origin[1], self.root_angle)
            created = 1

        new_branches = []
        for branch in self.branches:
            if branch.growth < 1.0 and branch.depth < self.max_depth:
                grown = branch.growth + rate
                # 50 steps of 0.02 must land exactly on 1.0
                branch.growth = 1.0 if grown >= 1.0 - _EPSILON else grown
            if (branch.growth >= 1.0 and not branch.spawned
                    and branch.depth < self.max_depth - 1):
                new_branches.extend(self._spawn_children(branch))

        self.branches.extend(new_branches)
        created += len(new_branches)
        if new_branches and self.is_complete:
            logger.debug("Plant complete with %d branches", len(self.branches))
        return created

    def reset(self):
        """Drop every branch. The next advance() starts a new root."""
        self.branches = []

    # --- Queries ---

    @property
    def root(self) -> Branch | None:
        return self.branches[0] if self.branches else None

    @property
    def tips(self) -> list[Branch]:
        """Branches that have not split (leaves and still-growing segments)."""
        return [b for b in self.branches if not b.spawned]

    @property
    def max_branches(self) -> int:
        """Upper bound on branch count: nodes in a full binary tree."""
        return 2 ** self.max_depth - 1

    @property
    def is_complete(self) -> bool:
        """True once every branch is fully grown and nothing is left to spawn."""
        if not self.branches:
            return False
        for b in self.branches:
            if b.growth < 1.0:
                return False
            if not b.spawned and b.depth < self.max_depth - 1:
                return False
        return True
