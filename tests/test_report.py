import io
import re

from labkit.strlist.report import (
    CONCAT_PREFIX,
    PART_A_MISSIONS,
    PART_B_NAMES,
    STARS,
    CRand,
    main,
    run_report,
    write_part_a,
    write_part_b,
)


def _take(rng, count):
    return [rng.next() for _ in range(count)]


def test_crand_known_first_values():
    rng = CRand(1)
    assert rng.next() == 1804289383
    assert rng.next() == 846930886


def test_crand_zero_seed_behaves_like_one():
    assert _take(CRand(0), 50) == _take(CRand(1), 50)


def test_crand_deterministic_and_in_range():
    first = _take(CRand(42), 200)
    assert first == _take(CRand(42), 200)
    assert all(0 <= v < 2 ** 31 for v in first)
    assert first != _take(CRand(43), 200)


def _part_a_text(seed=0):
    buf = io.StringIO()
    write_part_a(buf, CRand(seed))
    return buf.getvalue()


def test_part_a_frame():
    text = _part_a_text()
    assert text.startswith("== Ejercicio 1a ==\n\nCreando lista vacia\n\n")
    assert text.endswith("======================== Fin del test 1a =======================")
    assert "List length: 0\n" in text


def test_part_a_lists_names_in_order_with_valid_types():
    text = _part_a_text()
    nodes = re.findall(r"\tnode hash: (.*) \| type: (\d+)\n", text)
    assert [name for name, _ in nodes] == list(STARS) + list(PART_A_MISSIONS)
    assert all(0 <= int(t) < 8 for _, t in nodes)
    assert f"List length: {len(STARS)}\n" in text
    assert f"List length: {len(PART_A_MISSIONS)}\n" in text


def test_part_b_concat_lines_cover_all_names():
    buf = io.StringIO()
    write_part_b(buf, CRand(0))
    lines = buf.getvalue().split("\n")
    concat_lines = [l for l in lines if l.startswith(CONCAT_PREFIX)]
    assert len(concat_lines) == 8
    total = sum(len(l) - len(CONCAT_PREFIX) for l in concat_lines)
    assert total == sum(len(n) for n in PART_B_NAMES)
    assert lines[-1] == "======================== Fin del test 1b ======================="


def test_run_report_matches_parts_and_overwrites(tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("stale", encoding="utf-8")
    run_report(path)
    rng = CRand(0)
    buf = io.StringIO()
    write_part_a(buf, rng)
    write_part_b(buf, rng)
    assert path.read_text(encoding="utf-8") == buf.getvalue()


def test_main_writes_to_given_path(tmp_path):
    path = tmp_path / "report.txt"
    assert main([str(path)]) == 0
    content = path.read_text(encoding="utf-8")
    assert content.startswith("== Ejercicio 1a ==")
    assert "== Ejercicio 1b ==" in content