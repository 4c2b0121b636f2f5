"""Hand-instrumented worked examples.

Each function below is a small program written the way an instrumentation
pass would rewrite it: every tracked location checks out its site, binds
values with ``mint_tracked`` (or ``observe`` for tags handed in by a caller),
records every combining operation with ``record_interaction`` and commits
its site before returning. Tracked functions take and return a tag next to
each value.

``run_demo`` drives them like a program's ``main`` and is what the
``dynamic-ati demo`` command reports on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .engine import InferenceEngine
from .tags import Tag


def untracked_add(a: int, b: int) -> int:
    """A library call the instrumentation does not rewrite."""
    return a + b


def tracked_add(
    engine: InferenceEngine, a: int, a_tag: Tag, b: int, b_tag: Tag
) -> Tuple[int, Tag]:
    """An instrumented add: the result value is created, and tagged, here."""
    with engine.site("tracked_add") as site:
        engine.observe(site, "a", a_tag)
        engine.observe(site, "b", b_tag)

        res = a + b
        res_tag = engine.mint_tracked("res", res, site)
        engine.record_interaction([a_tag, b_tag, res_tag])

    return res, res_tag


def doubled_func(engine: InferenceEngine, x: int, x_tag: Tag, y: int, y_tag: Tag) -> None:
    with engine.site("doubled_func") as site:
        engine.observe(site, "x", x_tag)
        engine.observe(site, "y", y_tag)

        a = 2
        a_tag = engine.mint_tracked("a", a, site)
        b = 2
        b_tag = engine.mint_tracked("b", b, site)

        result = a + x
        result_tag = engine.mint_tracked("result", result, site)
        engine.record_interaction([a_tag, x_tag, result_tag])

        test = b + y
        test_tag = engine.mint_tracked("test", test, site)
        engine.record_interaction([b_tag, y_tag, test_tag])

        if test > 300:
            # The untracked call hides the addition, so the value it returns
            # is treated as created here with no interaction to its inputs.
            merged = untracked_add(result, test)
            engine.mint_tracked("merged", merged, site)


def complex_func(engine: InferenceEngine, iterations: int, iterations_tag: Tag) -> Tuple[int, int]:
    """Return the ``iterations``-th fibonacci number and ``2 ** iterations``.

    The loop rebinds ``current``, ``next_`` and ``pows_of_two``; each rebinding
    is observed and unioned with the binding it replaces so the variable keeps
    a single class across iterations.
    """
    with engine.site("complex_func") as site:
        engine.observe(site, "iterations", iterations_tag)

        current = 0
        current_tag = engine.mint_tracked("current", current, site)
        next_ = 1
        next_tag = engine.mint_tracked("next", next_, site)
        pows_of_two = 1
        pows_of_two_tag = engine.mint_tracked("pows_of_two", pows_of_two, site)

        for i in range(iterations):
            i_tag = engine.mint_tracked("i", i, site)
            engine.record_interaction([i_tag, iterations_tag])

            tmp = next_
            tmp_tag = engine.mint_tracked("tmp", tmp, site)
            engine.record_interaction([tmp_tag, next_tag])

            engine.record_interaction([current_tag, next_tag])
            next_ = current + next_
            old_next_tag = next_tag
            next_tag = engine.mint_tracked("next", next_, site)
            engine.record_interaction([next_tag, current_tag, old_next_tag])

            current = tmp
            current_tag = engine.mint_tracked("current", current, site)
            engine.record_interaction([current_tag, tmp_tag])

            old_pows_tag = pows_of_two_tag
            pows_of_two = pows_of_two + pows_of_two
            pows_of_two_tag = engine.mint_tracked("pows_of_two", pows_of_two, site)
            engine.record_interaction([pows_of_two_tag, old_pows_tag])

    return current, pows_of_two


@dataclass
class Inner:
    a: int


@dataclass
class InnerTag:
    a_tag: Tag


@dataclass
class Data:
    a: int
    b: str
    c: Inner

    @classmethod
    def new(cls, engine: InferenceEngine) -> Tuple["Data", "DataTag"]:
        with engine.site("Data.new") as site:
            a = 10
            a_tag = engine.mint_tracked("Data.a", a, site)
            b = "hello"
            b_tag = engine.mint_tracked("Data.b", b, site)
            inner_a = 20
            inner_a_tag = engine.mint_tracked("Inner.a", inner_a, site)

        return cls(a, b, Inner(inner_a)), DataTag(a_tag, b_tag, InnerTag(inner_a_tag))


@dataclass
class DataTag:
    """Tags mirroring the fields of :class:`Data`."""

    a_tag: Tag
    b_tag: Tag
    c_tag: InnerTag


def accepts_struct_add_fields(engine: InferenceEngine, data: Data, data_tag: DataTag) -> None:
    with engine.site("accepts_struct_add_fields") as site:
        engine.observe(site, "data.a", data_tag.a_tag)
        engine.observe(site, "data.b", data_tag.b_tag)
        engine.observe(site, "data.c.a", data_tag.c_tag.a_tag)

        data.c.a += data.a
        engine.record_interaction([data_tag.a_tag, data_tag.c_tag.a_tag])


def uses_structs(engine: InferenceEngine) -> None:
    with engine.site("uses_structs") as site:
        d, d_tag = Data.new(engine)
        engine.observe(site, "d.a", d_tag.a_tag)
        engine.observe(site, "d.b", d_tag.b_tag)
        engine.observe(site, "d.c.a", d_tag.c_tag.a_tag)

        accepts_struct_add_fields(engine, d, d_tag)


def run_demo(engine: InferenceEngine, iterations: int = 5) -> InferenceEngine:
    """Run every worked example under the ``main`` site and return ``engine``.

    Besides the per-function examples, ``main`` adds ``a1`` and ``a2`` through
    ``tracked_add`` and binds the sum as ``total``. That single addition is
    what puts ``a1``, ``a2`` and ``total`` in one abstract type of ``main``
    while ``b1`` and ``b2`` stay apart.
    """
    with engine.site("main") as site:
        a1 = 10
        a1_tag = engine.mint_tracked("a1", a1, site)
        b1 = 100
        b1_tag = engine.mint_tracked("b1", b1, site)
        doubled_func(engine, a1, a1_tag, b1, b1_tag)

        a2 = 20
        a2_tag = engine.mint_tracked("a2", a2, site)
        b2 = 200
        b2_tag = engine.mint_tracked("b2", b2, site)
        doubled_func(engine, a2, a2_tag, b2, b2_tag)

        # Literals passed straight into the call: tagged but not bound to
        # any variable of ``main``.
        a3_tag = engine.mint_untracked(30)
        b3_tag = engine.mint_untracked(300)
        doubled_func(engine, 30, a3_tag, 300, b3_tag)

        _, total_tag = tracked_add(engine, a1, a1_tag, a2, a2_tag)
        engine.observe(site, "total", total_tag)

        iterations_tag = engine.mint_tracked("iterations", iterations, site)
        complex_func(engine, iterations, iterations_tag)

        uses_structs(engine)

    return engine
