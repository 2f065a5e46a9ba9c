from bitbloom.rng import *


def test_pcg64_is_reproducible():
    a, b = Pcg64Source(42), Pcg64Source(42)
    assert [a.next_u64() for _ in range(8)] == [b.next_u64() for _ in range(8)]


def test_pcg64_seeds_differ():
    assert Pcg64Source(1).next_u64() != Pcg64Source(2).next_u64()


def test_words_are_64_bit():
    for source in (Pcg64Source(7), Pcg64Source(), SystemSource()):
        for _ in range(64):
            word = source.next_u64()
            assert isinstance(word, int)
            assert 0 <= word < 2**64


def test_sources_satisfy_protocol():
    assert isinstance(Pcg64Source(0), RandomSource)
    assert isinstance(SystemSource(), RandomSource)
    assert not isinstance(object(), RandomSource)
