# src/threadboard/services/threads.py
"""Reconstruct conversation threads from the parent relation."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from threadboard.models.message import Message
from threadboard.repositories.message_repo import MessageRepository
from threadboard.services.integrity import ThreadIntegrityValidator


@dataclass
class ThreadNode:
    """A message and its direct replies, each expanded recursively."""

    message: Message
    replies: list[ThreadNode] = field(default_factory=list)


class ThreadService:
    """Read-side traversal of reply trees.

    Traversals are iterative so deep threads never hit the recursion limit.
    """

    def __init__(self, session: Session) -> None:
        self.repo = MessageRepository(session)
        self.validator = ThreadIntegrityValidator(session)

    def subtree_of(self, root_id: int) -> list[Message]:
        """Return ``root_id`` and every message descending from it.

        Walks breadth-first with one store round-trip per depth level. The
        result starts with the root; the rest is level order.

        Raises:
            NotFoundError: "Message not found." if the root does not exist.
        """
        root = self.validator.assert_message_exists(root_id)
        collected: list[Message] = [root]
        visited: set[int] = {root.id}
        frontier: list[int] = [root.id]

        while frontier:
            next_frontier: list[int] = []
            for child in self.repo.list_children_of(frontier):
                if child.id in visited:
                    continue
                visited.add(child.id)
                collected.append(child)
                next_frontier.append(child.id)
            frontier = next_frontier

        return collected

    def thread_of(self, root_id: int) -> ThreadNode:
        """Return the subtree of ``root_id`` shaped as nested nodes."""
        messages = self.subtree_of(root_id)
        nodes = {message.id: ThreadNode(message) for message in messages}
        for message in messages[1:]:
            # parent_id is set for every non-root member of the closure
            nodes[message.parent_id].replies.append(nodes[message.id])  # type: ignore[index]
        return nodes[root_id]

    def ancestors_of(self, message_id: int) -> list[Message]:
        """Return the chain from ``message_id`` up to its thread root.

        The first element is the message itself, the last is the root.
        """
        current = self.validator.assert_message_exists(message_id)
        chain: list[Message] = [current]
        seen: set[int] = {current.id}
        pending: deque[int] = deque()
        if current.parent_id is not None:
            pending.append(current.parent_id)

        while pending:
            parent_id = pending.popleft()
            if parent_id in seen:
                break
            parent = self.repo.get_by_id(parent_id)
            if parent is None:
                break
            seen.add(parent.id)
            chain.append(parent)
            if parent.parent_id is not None:
                pending.append(parent.parent_id)

        return chain
