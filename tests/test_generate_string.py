from __future__ import annotations

import random
import re

import pytest

from regen import GenerationResult, Outcome, StringGenerator, generate_string
from regen.gen import fixed_source, pseudo_source, seeded_source
from regen.utils.errors import UnsupportedNodeError, UnsupportedPatternError


def test_fixed_source_digit_repeat() -> None:
    theanswer = fixed_source(2)
    result = generate_string("#-[0-9]{2,5}", theanswer)
    assert result == GenerationResult("#-2222", Outcome.CONTINUE)
    assert generate_string(r"#-\d{2,5}", theanswer).text == "#-2222"


def test_straight_match() -> None:
    result = generate_string("noAmbigu1ty!")
    assert result.text == "noAmbigu1ty!"
    assert not result.stopped


def test_begin_and_end_anchors_are_flagged() -> None:
    result = generate_string("^hello$", fixed_source(0))
    assert result.text == "hello"
    assert result.stopped
    assert result.outcome is Outcome.END_OF_TEXT


def test_end_text_cuts_trailing_literal() -> None:
    result = generate_string(r"abc\Zdef", fixed_source(0))
    assert result == GenerationResult("abc", Outcome.END_OF_TEXT)


@pytest.mark.parametrize(
    "pattern",
    [
        r"#-[0-9]{2,5}",
        r"127(\.[0-9]){3}",
        r"00:(:[0-9a-z]{2}){5}",
        r"((((((((((((((((((((((((((((((x)+)))y))))))))))))))))))))))))))*",
        r"[a-f0-9]{8}-[a-f0-9]{4}-4[a-f0-9]{3}",
        r"\w+@\w+\.(com|org|net)",
        r"(?P<area>\d{3})-\d{4}",
        r"[^\n]{5}",
        r"\S\s\D\W",
        r"colou?r|grey|gray",
        r"a.b.c",
        r"x{2,}y*z+",
    ],
)
def test_generated_strings_match(pattern: str) -> None:
    rng = pseudo_source(random.Random(20160101))
    gen = StringGenerator(rng)
    for result in gen.iter_strings(pattern, 25):
        assert not result.stopped
        # Categories are generated from their ASCII definitions.
        assert re.fullmatch(pattern, result.text, re.ASCII), (pattern, result.text)


def test_dotall_flag_reaches_generator() -> None:
    assert StringGenerator(fixed_source(94)).generate_string(".").text == "~"
    gen = StringGenerator(fixed_source(95))
    assert gen.generate_string(".", flags=re.DOTALL).text == "\n"
    assert StringGenerator(fixed_source(95), flags=re.DOTALL).generate_string(".").text == "\n"


def test_multiline_anchors() -> None:
    result = generate_string("^a$^b", fixed_source(0), flags=re.MULTILINE)
    assert result == GenerationResult("a\n\nb", Outcome.CONTINUE)
    result = generate_string("$a", fixed_source(0), flags=re.MULTILINE)
    assert result == GenerationResult("", Outcome.END_OF_TEXT)


def test_seeded_generation_is_reproducible() -> None:
    pattern = r"[a-z]{10,20}"
    a = generate_string(pattern, seeded_source("alpha", pattern=pattern))
    b = generate_string(pattern, seeded_source("alpha", pattern=pattern))
    c = generate_string(pattern, seeded_source("beta", pattern=pattern))
    assert a == b
    assert a.text != c.text


def test_unbound_max_limits_length() -> None:
    for result in StringGenerator(unbound_max=3).iter_strings("a*", 50):
        assert len(result.text) <= 3


def test_negative_unbound_max_rejected() -> None:
    with pytest.raises(ValueError):
        StringGenerator(unbound_max=-1)


def test_word_boundary_pattern_is_fatal() -> None:
    with pytest.raises(UnsupportedNodeError):
        generate_string(r"\bword\b")


def test_backreference_is_rejected() -> None:
    with pytest.raises(UnsupportedPatternError):
        generate_string(r"(a)\1")


def test_iter_strings_count() -> None:
    results = list(StringGenerator().iter_strings("ab", 3))
    assert [r.text for r in results] == ["ab", "ab", "ab"]
    assert list(StringGenerator().iter_strings("ab", 0)) == []
    with pytest.raises(ValueError):
        list(StringGenerator().iter_strings("ab", -1))


def test_result_str() -> None:
    assert str(generate_string("xyz")) == "xyz"
