"""Block decomposition of the global grid over a lexicographic process grid."""

from __future__ import annotations

from nsflow.parameters import Parameters


class ParallelConfiguration:
    """Fills the parallel part of ``parameters`` for process ``rank`` of ``nproc``.

    The processes form a grid of ``num_processors`` blocks ordered
    lexicographically (x fastest). A neighbour outside that grid is None.
    """

    def __init__(self, parameters: Parameters, rank: int = 0, nproc: int = 1) -> None:
        self.parameters = parameters
        parallel = parameters.parallel
        parallel.rank = rank

        self._create_indices()
        self._locate_neighbors()
        self._compute_sizes()

        nproc_from_file = parallel.num_processors[0] * parallel.num_processors[1]
        if parameters.geometry.dim == 3:
            nproc_from_file *= parallel.num_processors[2]
        if nproc != nproc_from_file:
            raise ValueError(
                "The number of processors specified in the configuration file "
                "doesn't match the communicator"
            )

    def _create_indices(self) -> None:
        parallel = self.parameters.parallel
        rank = parallel.rank
        n0, n1, _ = parallel.num_processors
        parallel.indices = [rank % n0, (rank // n0) % n1, rank // (n0 * n1)]

    def compute_rank_from_indices(self, i: int, j: int, k: int) -> int | None:
        """Rank of the block at (i, j, k), or None if it lies outside the process grid."""
        n0, n1, n2 = self.parameters.parallel.num_processors
        if not (0 <= i < n0 and 0 <= j < n1 and 0 <= k < n2):
            return None
        rank = i + j * n0
        if self.parameters.geometry.dim == 3:
            rank += k * n0 * n1
        return rank

    def _locate_neighbors(self) -> None:
        parallel = self.parameters.parallel
        i, j, k = parallel.indices
        if self.parameters.geometry.dim == 2:
            parallel.left_nb = self.compute_rank_from_indices(i - 1, j, 0)
            parallel.right_nb = self.compute_rank_from_indices(i + 1, j, 0)
            parallel.bottom_nb = self.compute_rank_from_indices(i, j - 1, 0)
            parallel.top_nb = self.compute_rank_from_indices(i, j + 1, 0)
            parallel.front_nb = None
            parallel.back_nb = None
        else:
            parallel.left_nb = self.compute_rank_from_indices(i - 1, j, k)
            parallel.right_nb = self.compute_rank_from_indices(i + 1, j, k)
            parallel.bottom_nb = self.compute_rank_from_indices(i, j - 1, k)
            parallel.top_nb = self.compute_rank_from_indices(i, j + 1, k)
            parallel.front_nb = self.compute_rank_from_indices(i, j, k - 1)
            parallel.back_nb = self.compute_rank_from_indices(i, j, k + 1)

    def _compute_sizes(self) -> None:
        parameters = self.parameters
        parallel = parameters.parallel
        geometry = parameters.geometry
        dim = geometry.dim
        global_sizes = (geometry.size_x, geometry.size_y, geometry.size_z)

        first_corner = list(parallel.first_corner)
        local_size = list(parallel.local_size)
        all_sizes: list[list[int]] = [[], [], []]

        for axis in range(dim):
            blocks = parallel.num_processors[axis]
            base, extra = divmod(global_sizes[axis], blocks)
            sizes = [base + 1 if block < extra else base for block in range(blocks)]
            index = parallel.indices[axis]
            first_corner[axis] = sum(sizes[:index])
            local_size[axis] = sizes[index]
            # Blocks on the global edge carry one extra layer for the outer pressure values.
            sizes[0] += 1
            sizes[-1] += 1
            all_sizes[axis] = sizes

        if dim == 2:
            first_corner[2] = 0

        parallel.first_corner = first_corner
        parallel.local_size = local_size
        parallel.sizes = all_sizes