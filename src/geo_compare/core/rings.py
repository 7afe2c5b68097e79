"""Stitch open way fragments into closed rings.

Fragments are matched greedily by endpoint: a ring grows from its trailing
point by appending whichever unused fragment starts (or, reversed, ends)
there. There is no backtracking, so an unlucky fragment order can leave one
boundary split across several rings.
"""

DEFAULT_TOLERANCE = 1e-4  # degrees, roughly 11 m


def points_match(a, b, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """True if two ``[lng, lat]`` points connect (strict per-axis threshold)."""
    return abs(a[0] - b[0]) < tolerance and abs(a[1] - b[1]) < tolerance


def is_closed(ring, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    first, last = ring[0], ring[-1]
    return abs(first[0] - last[0]) <= tolerance and abs(first[1] - last[1]) <= tolerance


def close_ring(ring: list, tolerance: float = DEFAULT_TOLERANCE) -> list:
    """Append the first point when the ring's endpoints are apart."""
    if not is_closed(ring, tolerance):
        return [*ring, ring[0]]
    return ring


def _distinct_points(coords) -> int:
    return len({(p[0], p[1]) for p in coords})


def assemble_rings(fragments: list[list[list[float]]], tolerance: float = DEFAULT_TOLERANCE) -> list[list[list[float]]]:
    """Convert open coordinate fragments into closed rings.

    Args:
        fragments: Coordinate sequences, each ``[[lng, lat], ...]``.
        tolerance: Per-axis endpoint match threshold in degrees.

    Returns:
        Closed rings with at least 4 points each.
    """
    if not fragments:
        return []

    if len(fragments) == 1:
        fragment = fragments[0]
        if _distinct_points(fragment) < 3:
            return []
        ring = close_ring(list(fragment), tolerance)
        # A near-closed three-point fragment is not a ring
        return [ring] if len(ring) >= 4 else []

    rings = []
    unused = [list(f) for f in fragments]

    while unused:
        ring = list(unused.pop(0))

        connected = True
        while connected and unused:
            connected = False
            tail = ring[-1]
            for i, fragment in enumerate(unused):
                if points_match(tail, fragment[0], tolerance):
                    ring.extend(fragment[1:])
                elif points_match(tail, fragment[-1], tolerance):
                    ring.extend(reversed(fragment[:-1]))
                else:
                    continue
                del unused[i]
                connected = True
                break

        if len(ring) >= 4:
            rings.append(close_ring(ring, tolerance))

    return rings
