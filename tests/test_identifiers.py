"""Unit tests for the identifier allocator."""

from blog_tracker_api.app.services.identifiers import IdentifierAllocator


def test_allocator_starts_at_one_and_increments() -> None:
    allocator = IdentifierAllocator()

    assert [allocator.next() for _ in range(3)] == [1, 2, 3]


def test_allocator_honours_custom_start() -> None:
    allocator = IdentifierAllocator(start=100)

    assert allocator.next() == 100
    assert allocator.next() == 101
