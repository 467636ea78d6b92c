# Frequency buckets for the LFU cache, kept as a sorted circular linked list
from typing import Hashable, Iterator, Optional, Set


class FrequencyBucket:
    """All resident keys that have been used exactly `frequency` times."""

    __slots__ = ("frequency", "keys", "prev", "next")

    def __init__(self, frequency: int):
        self.frequency = frequency
        self.keys: Set[Hashable] = set()
        # A fresh bucket links to itself until it is spliced in
        self.prev: "FrequencyBucket" = self
        self.next: "FrequencyBucket" = self

    def __repr__(self) -> str:
        return f"FrequencyBucket(frequency={self.frequency}, keys={len(self.keys)})"


class FrequencyList:
    """
    Circular doubly-linked list of frequency buckets.

    The list is anchored by a sentinel bucket of frequency 0 that never holds
    keys and is never removed. Walking forward from the sentinel visits the
    buckets in strictly increasing frequency, so `head.next` is always the
    least frequently used bucket. Every non-sentinel bucket holds at least
    one key; a bucket is unlinked the moment its last key leaves.
    """

    def __init__(self):
        self._head = FrequencyBucket(0)

    @property
    def head(self) -> FrequencyBucket:
        return self._head

    def is_empty(self) -> bool:
        return self._head.next is self._head

    def lowest(self) -> Optional[FrequencyBucket]:
        """Return the minimum-frequency bucket, or None if only the sentinel is left."""
        bucket = self._head.next
        return None if bucket is self._head else bucket

    def bucket_after(self, prev: FrequencyBucket, frequency: int) -> FrequencyBucket:
        """
        Return the bucket for `frequency` directly after `prev`.

        If `prev.next` already carries that frequency it is reused, otherwise
        a new bucket is spliced in between `prev` and `prev.next`. Callers
        pass a frequency that sorts between the two neighbours.
        """
        following = prev.next
        if following is not self._head and following.frequency == frequency:
            return following

        bucket = FrequencyBucket(frequency)
        bucket.prev = prev
        bucket.next = following
        prev.next = bucket
        following.prev = bucket
        return bucket

    def add_key(self, key: Hashable, bucket: FrequencyBucket) -> None:
        bucket.keys.add(key)

    def move_key(self, key: Hashable, source: FrequencyBucket, target: FrequencyBucket) -> None:
        """Move `key` from `source` to `target`, dropping `source` if it empties."""
        source.keys.remove(key)
        target.keys.add(key)
        if not source.keys:
            self._unlink(source)

    def discard_key(self, key: Hashable, bucket: FrequencyBucket) -> None:
        bucket.keys.remove(key)
        if not bucket.keys:
            self._unlink(bucket)

    def _unlink(self, bucket: FrequencyBucket) -> None:
        if bucket is self._head:
            return
        bucket.prev.next = bucket.next
        bucket.next.prev = bucket.prev
        bucket.prev = bucket.next = bucket

    def __iter__(self) -> Iterator[FrequencyBucket]:
        bucket = self._head.next
        while bucket is not self._head:
            yield bucket
            bucket = bucket.next

    def __len__(self) -> int:
        return sum(1 for _ in self)
