from resmap_core import SequentialIDGenerator, UUID4Generator


def test_uuid_generator_returns_distinct_strings() -> None:
    gen = UUID4Generator()

    first, second = gen.next_id(), gen.next_id()

    assert isinstance(first, str)
    assert first != second


def test_sequential_generator_advances_past_explicit_keys() -> None:
    gen = SequentialIDGenerator()

    assert gen.next_id() == 1
    gen.advance_past(10)
    assert gen.next_id() == 11
    gen.advance_past(3)
    assert gen.next_id() == 12
