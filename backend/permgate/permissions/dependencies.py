# Overview: Dependency graph walks over the catalog adjacency map.

from __future__ import annotations

from typing import Iterable, Mapping

from ..errors import DependencyCycle

WHITE, GRAY, BLACK = 0, 1, 2


def close_over_dependencies(
    names: Iterable[str],
    dependency_map: Mapping[str, Iterable[str]],
) -> frozenset[str]:
    """
    Transitive closure of names through dependency_map.

    Iterative DFS with three-colour marking: a GRAY node reached again means
    a back edge, which raises DependencyCycle with the offending path.
    Names missing from the map are kept and treated as having no dependencies.
    """
    color: dict[str, int] = {}

    for root in names:
        if color.get(root, WHITE) != WHITE:
            continue

        color[root] = GRAY
        path = [root]
        stack = [iter(dependency_map.get(root, ()))]

        while stack:
            dep = next(stack[-1], None)
            if dep is None:
                stack.pop()
                color[path.pop()] = BLACK
                continue

            state = color.get(dep, WHITE)
            if state == GRAY:
                start = path.index(dep)
                raise DependencyCycle(path[start:] + [dep])
            if state == BLACK:
                continue

            color[dep] = GRAY
            path.append(dep)
            stack.append(iter(dependency_map.get(dep, ())))

    return frozenset(color)


def find_cycle(dependency_map: Mapping[str, Iterable[str]]) -> list[str] | None:
    """Return one dependency cycle in the whole graph, or None if it is acyclic."""
    try:
        close_over_dependencies(dependency_map.keys(), dependency_map)
    except DependencyCycle as exc:
        return exc.cycle
    return None
