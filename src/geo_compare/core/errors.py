"""Per-location failures raised while building a boundary.

Every error here is caught at the location boundary by the pipeline and
turned into a failed FetchResult; none of them stop a batch.
"""


class BoundaryError(Exception):
    """Base class for recoverable per-location failures."""


class NoElementsReturned(BoundaryError):
    def __init__(self):
        super().__init__("No boundary data found in OSM")


class NoRelationsFound(BoundaryError):
    def __init__(self):
        super().__init__("No relations found")


class NoValidGeometryFragments(BoundaryError):
    def __init__(self):
        super().__init__("No valid geometry ways found")


class NoValidRingsAssembled(BoundaryError):
    def __init__(self):
        super().__init__("No valid geometry rings found")


class FragmentedBoundary(BoundaryError):
    def __init__(self, original_count: int, kept_count: int, fragmentation_ratio: float):
        self.original_count = original_count
        self.kept_count = kept_count
        self.fragmentation_ratio = fragmentation_ratio
        super().__init__(
            f"Fragmented boundary data: {original_count} polygons "
            f"({kept_count} kept) with {fragmentation_ratio * 100:.1f}% fragments"
        )


class InsufficientDetail(BoundaryError):
    def __init__(self, point_count: int, min_points: int):
        self.point_count = point_count
        self.min_points = min_points
        super().__init__(
            f"Insufficient geometry data: only {point_count} points "
            f"(minimum {min_points} required for complete boundary)"
        )


class UpstreamTransportError(BoundaryError):
    def __init__(self, status_code: int | None = None):
        self.status_code = status_code
        if status_code is None:
            super().__init__("Overpass API error: no server reachable")
        else:
            super().__init__(f"Overpass API error: {status_code}")


class PersistenceError(BoundaryError):
    def __init__(self, detail: str):
        super().__init__(f"Database error: {detail}")
