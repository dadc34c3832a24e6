import pytest

from dict_enhance.common.errors import MalformedBlobError
from dict_enhance.corpus.engine import CorpusEngine, EngineStats
from dict_enhance.corpus.models import CorpusBlob
from dict_enhance.glossary.sources import EdictFormat
from dict_enhance.glossary.stack import GlossaryStack

HEADER = "<html><body>"


def _blob(key, *entries):
    return CorpusBlob(key, HEADER + "".join(entries) + "</body></html>")


def test_end_to_end_edict_gloss_is_merged(tmp_path, make_entry):
    edict = tmp_path / "edict2"
    edict.write_text("食べる /to eat/EntL1234567X/\n", encoding="utf-8")
    stack = GlossaryStack([EdictFormat().load(edict)])
    entry = make_entry("たべる", "食べる")

    [out] = list(CorpusEngine(stack).run([CorpusBlob("ta", HEADER + entry)]))

    assert out.key == "ta"
    assert out.text == HEADER + '<a name="たべる" /><b>たべる</b>【食べる】<p>to eat<p>'


def test_statistics_track_every_outcome(make_stack, make_entry):
    stack = make_stack(("edict2", {"木": "tree"}), ("japanese3", {"岳": "peak"}))
    blob = _blob(
        "ki",
        make_entry("き", "木", body="wood"),
        make_entry("たけ", "岳／嶽"),
        make_entry("もり", "森"),
        make_entry("する"),
        '<a name="broken" /><b>broken</b>',
    )
    engine = CorpusEngine(stack)

    [out] = list(engine.run([blob]))

    stats = engine.stats
    assert stats.blobs == 1
    assert stats.entries == 5
    assert stats.merged == 2
    assert stats.resolved == {"edict2": 1, "japanese3": 1}
    assert stats.no_match == 1
    assert stats.without_variants == 1
    assert stats.mismatches == 1
    assert "【木】<p>tree<p>wood" in out.text
    assert "【岳／嶽】<p>peak<p>" in out.text
    assert stack.usage() == {"edict2": 1, "japanese3": 1}


def test_unparsable_entry_passes_through_byte_identical(make_stack):
    broken = '<a name="壊" /><b>こわ</b>【壊】 no paragraph'
    blob = _blob("ko", broken)
    engine = CorpusEngine(make_stack(("edict2", {"壊": "break"})))

    [out] = list(engine.run([blob]))

    assert out.text == blob.text
    assert engine.stats.mismatches == 1
    assert engine.stats.merged == 0
    assert sum(engine.stats.resolved.values()) == 0


def test_merge_mode_counts_each_contributing_glossary(make_stack, make_entry):
    stack = make_stack(("A", {"木": "a"}), ("B", {"木": "b"}), merge_all=True)
    engine = CorpusEngine(stack)

    [out] = list(engine.run([_blob("ki", make_entry("き", "木"))]))

    assert "【木】<p>a<p>b<p>" in out.text
    assert engine.stats.merged == 1
    assert engine.stats.resolved == {"A": 1, "B": 1}


def test_worker_pool_preserves_blob_order_and_totals(make_stack, make_entry):
    stack = make_stack(("edict2", {"木": "tree", "岳": "peak"}))
    blobs = [
        _blob(f"b{i}", make_entry("き", "木"), make_entry("たけ", "岳"))
        for i in range(6)
    ]
    engine = CorpusEngine(stack, workers=3)

    outputs = list(engine.run(blobs))

    assert [b.key for b in outputs] == [f"b{i}" for i in range(6)]
    assert engine.stats.blobs == 6
    assert engine.stats.merged == 12
    assert stack.usage() == {"edict2": 12}


def test_blob_without_anchor_aborts(make_stack):
    engine = CorpusEngine(make_stack(("A", {})))

    with pytest.raises(MalformedBlobError):
        list(engine.run([CorpusBlob("zz", "<html></html>")]))


def test_check_headword_traces_without_rewriting(make_stack, make_entry):
    stack = make_stack(("A", {"嶽": "crag"}))
    blobs = [
        _blob("ta", make_entry("たけ", "岳／嶽"), make_entry("き", "木")),
        _blob("tb", make_entry("たけ", "竹")),
    ]

    traces = CorpusEngine(stack).check_headword(blobs, "たけ")

    assert [(t.bucket, t.result.gloss) for t in traces] == [("ta", "crag"), ("tb", "")]


def test_stats_summary_and_merge():
    total = EngineStats()
    part = EngineStats(blobs=1, entries=3, merged=2, no_match=1)
    part.resolved.update({"edict2": 2})
    total.add(part)
    total.add(part)

    assert total.as_dict()["resolved"] == {"edict2": 4}
    assert total.summary(["edict2", "japanese3"]).startswith(
        "total entries 6, matches: 4 (edict2: 4, japanese3: 0)"
    )


def test_supplementary_plane_variant_resolves(make_stack, make_entry):
    engine = CorpusEngine(make_stack(("edict2", {"𠮟る": "to scold"})))

    [out] = list(engine.run([_blob("si", make_entry("しかる", "叱る／𠮟る"))]))

    assert "【叱る／𠮟る】<p>to scold<p>" in out.text
    assert engine.stats.merged == 1
    assert engine.stats.without_variants == 0


def test_check_headword_leaves_usage_counters_alone(make_stack, make_entry):
    stack = make_stack(("A", {"木": "tree"}), ("B", {"木": "wood"}), merge_all=True)

    [trace] = CorpusEngine(stack).check_headword([_blob("ki", make_entry("き", "木"))], "き")

    assert trace.result.sources == ("A", "B")
    assert stack.usage() == {"A": 0, "B": 0}
