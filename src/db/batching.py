"""
Batched write support.

WriteBatch collects upserts and applies them in a single transaction.
BatchWriter sits on top of any batch object exposing set/commit/len and
commits whenever the queued operations reach the configured limit, so no
commit ever carries more operations than that limit.
"""

from typing import Any, Callable, List, Sequence, Tuple

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError


class BatchCommitError(Exception):
    """Raised when an atomic batch commit fails."""
    pass


class WriteBatch:
    """
    Group of set-by-key writes committed atomically.

    Example:
        >>> batch = WriteBatch(db.SessionLocal)
        >>> batch.set(VocabularyWord, 'analyze', {'original_word': 'analyze', ...})
        >>> batch.commit()
        1
    """

    def __init__(self, session_factory: Callable):
        self._session_factory = session_factory
        self._operations: List[Any] = []

    def __len__(self) -> int:
        return len(self._operations)

    def set(self, target, key: str, document: dict):
        """
        Queue an upsert of `document` under `key` in the table of `target`.

        The ORM instance is built immediately, so an invalid document fails
        here and not at commit time.
        """
        instance = target(**document)
        primary_key = inspect(target).primary_key[0].key
        setattr(instance, primary_key, key)
        self._operations.append(instance)

    def commit(self) -> int:
        """
        Apply all queued writes in one transaction.

        Returns:
            Number of operations committed

        Raises:
            BatchCommitError: If the transaction fails (it is rolled back)
        """
        count = len(self._operations)
        session = self._session_factory()
        try:
            for instance in self._operations:
                session.merge(instance)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise BatchCommitError(f"Failed to commit batch of {count} operations: {e}") from e
        finally:
            session.close()

        self._operations = []
        return count


class BatchWriter:
    """
    Accumulate-then-flush writer bounded by a maximum operation count.

    Args:
        new_batch: Factory returning an empty batch (set/commit/len)
        max_operations: Maximum operations in a single commit
    """

    def __init__(self, new_batch: Callable[[], Any], max_operations: int = 500, verbose: bool = True):
        if max_operations < 1:
            raise ValueError("max_operations must be at least 1")

        self._new_batch = new_batch
        self.max_operations = max_operations
        self.verbose = verbose
        self.commit_sizes: List[int] = []
        self._batch = new_batch()

    @property
    def pending(self) -> int:
        """Operations queued but not yet committed."""
        return len(self._batch)

    @property
    def operations_committed(self) -> int:
        return sum(self.commit_sizes)

    def set(self, target, key: str, document: dict):
        """Queue one write; commits the batch when it reaches the limit."""
        self.set_many([(target, key, document)])

    def set_many(self, operations: Sequence[Tuple[Any, str, dict]]):
        """
        Queue a group of writes that must land in the same commit.

        The pending batch is committed first when the group would not fit
        in it, so a group is never split across commits.

        Raises:
            ValueError: If the group alone exceeds max_operations
        """
        if len(operations) > self.max_operations:
            raise ValueError(
                f"Group of {len(operations)} operations exceeds the limit of {self.max_operations}"
            )

        if len(self._batch) + len(operations) > self.max_operations:
            self._commit()

        for target, key, document in operations:
            self._batch.set(target, key, document)

        if len(self._batch) >= self.max_operations:
            self._commit()

    def flush(self) -> int:
        """Commit any partial batch. Returns the number of operations committed."""
        if len(self._batch) == 0:
            return 0
        return self._commit(final=True)

    def _commit(self, final: bool = False) -> int:
        size = len(self._batch)
        self._batch.commit()
        self.commit_sizes.append(size)
        self._batch = self._new_batch()

        if self.verbose:
            label = "final batch" if final else "batch"
            print(f"  ✓ Committed {label} of {size} operations")

        return size
