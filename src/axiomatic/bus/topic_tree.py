"""Per-object publish/subscribe engine.

Every modeled object owns (lazily) one ``TopicTree``. A topic is any
sequence of values; segments are coerced to text before matching, so ``1``
and ``"1"`` name the same topic.

Each tree node carries a newest-first, intrusive, doubly-linked list of
``Subscription`` nodes plus children keyed by the next topic segment::

    root            <- subscribers with no topic: see every publish
      propertyChange
        first_name  <- ("propertyChange", "first_name") subscribers

``publish(*args)`` notifies the root list, then the list at every prefix
depth of *args* that exists. Listeners are called synchronously as
``listener(subscription, *args)``; any exception propagates to the
publisher.

Removal during delivery is safe: the delivery loop reads a node's ``next``
pointer before invoking it, destroyed nodes are skipped, and unlinking
leaves a destroyed node's own ``next`` pointer intact so a pass that is
currently sitting on it can still step forward. Subscriptions added while a
list is being delivered go in at its head, behind the cursor, and are first
seen by the next publish.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from axiomatic.core.types import coerce_text

Listener = Callable[..., Any]


class Subscription:
    """A node in a ``ListenerList``. ``destroy()`` detaches it."""

    __slots__ = ("callback", "prev", "next", "owner", "destroyed", "src")

    def __init__(self, callback: Listener, owner: ListenerList) -> None:
        self.callback = callback
        self.prev: Subscription | None = None
        self.next: Subscription | None = None
        self.owner: ListenerList | None = owner
        self.destroyed = False
        # Optional back-reference to whatever made the subscription (a Slot).
        self.src: Any = None

    def destroy(self) -> None:
        if self.destroyed:
            return
        self.destroyed = True

        owner = self.owner
        if self.prev is not None:
            self.prev.next = self.next
        elif owner is not None and owner.head is self:
            owner.head = self.next
        if self.next is not None:
            self.next.prev = self.prev

        # self.next is kept so an in-flight delivery can move past us.
        self.prev = None
        self.owner = None

    def __repr__(self) -> str:
        state = "destroyed" if self.destroyed else "live"
        return f"<Subscription {getattr(self.callback, '__name__', self.callback)!r} {state}>"


class SubscriptionGroup:
    """Destroys several subscriptions together."""

    def __init__(self, *subscriptions: Any) -> None:
        self.subscriptions = list(subscriptions)
        self.destroyed = False

    def destroy(self) -> None:
        if self.destroyed:
            return
        self.destroyed = True
        for s in self.subscriptions:
            s.destroy()


class ListenerList:
    """One tree node: its own subscriber list plus child nodes."""

    __slots__ = ("head", "children")

    def __init__(self) -> None:
        self.head: Subscription | None = None
        self.children: dict[str, ListenerList] = {}

    def add(self, callback: Listener) -> Subscription:
        s = Subscription(callback, self)
        s.next = self.head
        if self.head is not None:
            self.head.prev = s
        self.head = s
        return s

    def child(self, segment: Any, create: bool = False) -> ListenerList | None:
        key = coerce_text(segment)
        node = self.children.get(key)
        if node is None and create:
            node = self.children[key] = ListenerList()
        return node

    def notify(self, args: tuple[Any, ...]) -> int:
        count = 0
        s = self.head
        while s is not None:
            nxt = s.next
            if not s.destroyed:
                s.callback(s, *args)
                count += 1
            s = nxt
        return count

    def has_live(self) -> bool:
        s = self.head
        while s is not None:
            if not s.destroyed:
                return True
            s = s.next
        return False

    def __len__(self) -> int:
        n = 0
        s = self.head
        while s is not None:
            n += not s.destroyed
            s = s.next
        return n


class TopicTree:
    """Topic-keyed subscriber tree for one object."""

    def __init__(self) -> None:
        self.root = ListenerList()

    def publish(self, *args: Any) -> int:
        """Deliver *args* to matching subscribers; return the number notified."""
        count = self.root.notify(args)

        node: ListenerList | None = self.root
        for segment in args:
            node = node.child(segment)
            if node is None:
                break
            count += node.notify(args)

        return count

    def subscribe(self, topic: tuple[Any, ...], listener: Listener) -> Subscription:
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {listener!r}")

        node = self.root
        for segment in topic:
            node = node.child(segment, create=True)
        return node.add(listener)

    def unsubscribe(self, topic: tuple[Any, ...], listener: Listener) -> bool:
        """Destroy the first subscription to *topic* whose callback is *listener*."""
        node: ListenerList | None = self.root
        for segment in topic:
            node = node.child(segment)
            if node is None:
                return False

        s = node.head
        while s is not None:
            if s.callback == listener and not s.destroyed:
                s.destroy()
                return True
            s = s.next
        return False

    def has_listeners(self, topic: tuple[Any, ...] = ()) -> bool:
        """True if a publish on *topic* would reach at least one subscriber."""
        node: ListenerList | None = self.root
        if node.has_live():
            return True
        for segment in topic:
            node = node.child(segment)
            if node is None:
                return False
            if node.has_live():
                return True
        return False
