"""Comment tree traversal."""

from typing import Iterable

import logfire

from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId

from .base import Service


class CommentTreeResolver(Service):
    """Finds every reply beneath a comment.

    Traversal is iterative and level by level: the whole frontier is
    expanded with one ``find_ids_by_parents`` query (split into batches
    of ``batch_size`` ids), so the number of round trips grows with tree
    depth rather than tree size, and deep threads never touch the
    interpreter's recursion limit.
    """

    def __init__(self, batch_size: int = 5000) -> None:
        """Initialize resolver.

        Args:
            batch_size: Max parent ids per lookup query
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.batch_size = batch_size

    async def resolve_descendants(
        self, comments: CommentRepository, root_id: CommentId
    ) -> list[CommentId]:
        """Resolve all strict descendants of a comment.

        The root's existence is not checked; an unknown id, like a leaf,
        has no descendants.

        Args:
            comments: Comment repository bound to the caller's transaction
            root_id: Comment whose subtree to resolve

        Returns:
            Descendant IDs in breadth-first order, without duplicates and
            without the root
        """
        descendants = await self.resolve_descendants_of_many(comments, [root_id])
        return [c for c in descendants if c != root_id]

    async def resolve_descendants_of_many(
        self, comments: CommentRepository, root_ids: Iterable[CommentId]
    ) -> list[CommentId]:
        """Resolve all strict descendants of several comments at once.

        Roots that are themselves descendants of another root are reported
        as descendants; other roots are never included.

        Args:
            comments: Comment repository bound to the caller's transaction
            root_ids: Comments whose subtrees to resolve

        Returns:
            Descendant IDs in breadth-first order, without duplicates
        """
        roots = list(dict.fromkeys(root_ids))
        with logfire.span("comment_tree.resolve_descendants", roots=len(roots)):
            # Ordered set: insertion order is discovery (level) order
            found: dict[CommentId, None] = {}
            visited: set[CommentId] = set(roots)
            frontier = roots
            depth = 0

            while frontier:
                children = await self._find_children(comments, frontier)
                next_frontier = []
                for child_id in children:
                    found.setdefault(child_id, None)
                    if child_id not in visited:
                        visited.add(child_id)
                        next_frontier.append(child_id)
                frontier = next_frontier
                if frontier:
                    depth += 1

            logfire.info(
                "Descendants resolved",
                roots=len(roots),
                descendants=len(found),
                depth=depth,
            )
            return list(found)

    async def _find_children(
        self, comments: CommentRepository, parent_ids: list[CommentId]
    ) -> list[CommentId]:
        """Fetch the direct replies of a frontier, batch by batch."""
        children: list[CommentId] = []
        for start in range(0, len(parent_ids), self.batch_size):
            batch = parent_ids[start : start + self.batch_size]
            children.extend(await comments.find_ids_by_parents(batch))
        return children
