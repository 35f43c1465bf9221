"""Strongly-connected components of the similarity graph.

Iterative Tarjan: a single depth-first pass with discovery indices and
low-links.  Each vertex is pushed onto the component stack once and
popped once, so the whole pass runs in O(V + E) time with O(V) extra
space.  The explicit call stack avoids Python's recursion limit on long
chains of similar files.
"""

from __future__ import annotations

import structlog

from .graph_builder import SimilarityGraph

_UNVISITED = -1


def strongly_connected_components(graph: SimilarityGraph) -> dict[int, int]:
    """Assign a component id to every vertex of ``graph``.

    Two vertices share an id iff each is reachable from the other.
    Component ids are numbered from 0 in the order components are
    completed; for a given graph and edge insertion order the numbering
    is deterministic.

    Returns:
        Mapping from vertex (document id) to component id.  Empty for an
        empty graph.
    """
    n = graph.document_count
    index = [_UNVISITED] * (n + 1)
    lowlink = [0] * (n + 1)
    on_stack = [False] * (n + 1)
    stack: list[int] = []
    component: dict[int, int] = {}
    next_index = 0
    next_component = 0

    for root in graph.vertices():
        if index[root] != _UNVISITED:
            continue

        # Frames are (vertex, position of the next successor to visit).
        work: list[tuple[int, int]] = [(root, 0)]
        index[root] = lowlink[root] = next_index
        next_index += 1
        stack.append(root)
        on_stack[root] = True

        while work:
            vertex, pos = work[-1]
            successors = graph.successors(vertex)

            if pos < len(successors):
                work[-1] = (vertex, pos + 1)
                target = successors[pos]
                if index[target] == _UNVISITED:
                    index[target] = lowlink[target] = next_index
                    next_index += 1
                    stack.append(target)
                    on_stack[target] = True
                    work.append((target, 0))
                elif on_stack[target]:
                    lowlink[vertex] = min(lowlink[vertex], index[target])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[vertex])

            if lowlink[vertex] == index[vertex]:
                while True:
                    member = stack.pop()
                    on_stack[member] = False
                    component[member] = next_component
                    if member == vertex:
                        break
                next_component += 1

    structlog.get_logger().debug(
        "components_extracted",
        vertices=n,
        components=next_component,
    )
    return component
