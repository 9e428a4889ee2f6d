"""End-to-end tests for the Brisnet PP pipeline and its exports.

Run:  python -m pytest tests/test_brisnet_pp_parser.py -v
"""

import json
import logging

import pandas as pd

from brisnet_pp_parser import (
    PP_ROW_COLUMNS,
    RECORD_COLUMNS,
    assemble_record,
    main,
    parse_brisnet_pp_to_json,
    parse_document,
    past_performances_to_dataframe,
    records_to_dataframe,
)
from pp_models import HorseRecord, JockeyInfo, RecordSpan
from pp_segmenter import segment_document

# ═══════════════════════════════════════════════════════════════════════════
# 1. Pipeline scenarios
# ═══════════════════════════════════════════════════════════════════════════


class TestParseDocument:
    def test_two_horse_header_card(self, scenario_a):
        records = parse_document(scenario_a)
        assert len(records) == 2
        first, second = records
        assert (first.post, first.name, first.tag) == (3, "SECRETARIAT", "(A1)")
        assert first.owner == "Meadow Stable"
        assert first.trainer == "Lucien Laurin"
        assert first.odds == ""
        assert first.jockey == JockeyInfo()
        assert (second.post, second.name) == (5, "SEABISCUIT")
        assert second.owner == "Charles Howard"

    def test_full_block(self, sample_card):
        horse = parse_document(sample_card)[0]
        assert horse.post == 1
        assert horse.name == "Way of Appeal"
        assert horse.tag == "(S 3)"
        assert horse.owner == "Trinity Elite Llc"
        assert horse.silks == "7/2 Red, Red Cap"
        assert horse.odds == "7/2"
        assert horse.jockey == JockeyInfo("BARRIOS RICARDO", "254 58-42-39 23%")
        assert horse.trainer == "Cady Khalil (150 18-24-31 12%)"
        assert horse.breeder == "Smith Racing (WV)"
        assert (horse.sex, horse.age) == ("f", "3")
        assert horse.sire == "Appeal (Not for Love) $25,000"
        assert horse.dam == "Appealing (Storm Cat)"
        assert horse.prime_power == "101.5 (4th)"
        assert horse.life == "6 2 - 1 - 1 $70,038 89"
        assert list(horse.by_year) == ["2025", "2024"]
        assert list(horse.surfaces) == ["Fst", "Trf"]
        assert len(horse.workouts) == 2
        assert horse.notes == ["ñ Won last race", "× Moves up in class"]
        assert [pp.date for pp in horse.past_performances] == ["09Oct25Aqu", "12Sep25Sar"]

    def test_second_horse(self, sample_card):
        horse = parse_document(sample_card)[1]
        assert (horse.post, horse.name) == (2, "Seabiscuit")
        assert horse.odds == "5/1"
        assert horse.jockey.name == "POLLARD RED"
        assert (horse.sex, horse.age) == ("h", "5")
        assert horse.prime_power == "131.9 (2nd)"
        assert horse.past_performances == []

    def test_fallback_anchored_card(self, fallback_card):
        records = parse_document(fallback_card)
        assert [(r.post, r.name) for r in records] == [(1, "Way Of Appeal"), (2, "Second Wind")]
        assert records[0].trainer == "Cady Khalil"
        assert records[1].owner == "Howard Stable"

    def test_no_anchor_document(self):
        records = parse_document("no anchors here\njust words")
        assert len(records) == 1
        assert records[0].post is None
        assert records[0].name == ""
        assert records[0].raw == "no anchors here\njust words"

    def test_empty_input(self):
        assert parse_document("") == []
        assert parse_document(None) == []

    def test_one_record_per_span(self, sample_card, scenario_a, fallback_card):
        for card in (sample_card, scenario_a, fallback_card):
            assert len(parse_document(card)) == len(segment_document(card))

    def test_document_order(self):
        text = "7   ZULU (A)\nOwn: Z\n2   ALPHA (B)\nOwn: A\n"
        assert [r.post for r in parse_document(text)] == [7, 2]

    def test_idempotent(self, sample_card):
        assert parse_document(sample_card) == parse_document(sample_card)

    def test_crlf_matches_lf(self, sample_card):
        crlf = parse_document(sample_card.replace("\n", "\r\n"))
        lf = parse_document(sample_card)
        assert crlf == lf

    def test_lone_cr_matches_lf(self, sample_card):
        assert parse_document(sample_card.replace("\n", "\r")) == parse_document(sample_card)


# ═══════════════════════════════════════════════════════════════════════════
# 2. Record assembly
# ═══════════════════════════════════════════════════════════════════════════


class TestAssembleRecord:
    def test_empty_block(self):
        assert assemble_record("") == HorseRecord()
        assert assemble_record(None) == HorseRecord()

    def test_bare_text_block(self):
        record = assemble_record("4  Runner (E 2)\nOwn: Somebody\nTrnr: Nobody")
        assert (record.post, record.name, record.tag) == (4, "Runner", "(E 2)")
        assert record.owner == "Somebody"

    def test_span_identity_wins_over_header(self):
        span = RecordSpan(post=9, name="Anchored", raw="4  Runner (E 2)\nOwn: Somebody")
        record = assemble_record(span)
        assert (record.post, record.name) == (9, "Anchored")

    def test_extractor_failure_falls_back(self, monkeypatch, caplog):
        def boom(block):
            raise ValueError("bad block")

        monkeypatch.setattr("brisnet_pp_parser.parse_owner", boom)
        span = RecordSpan(post=3, name="SECRETARIAT", raw="3   SECRETARIAT (A1)\nOwn: Meadow")
        with caplog.at_level(logging.WARNING, logger="brisnet_pp_parser"):
            record = assemble_record(span)
        assert record == HorseRecord(post=3, name="SECRETARIAT", raw=span.raw)
        assert "bad block" in caplog.text


# ═══════════════════════════════════════════════════════════════════════════
# 3. Exports
# ═══════════════════════════════════════════════════════════════════════════


class TestExports:
    def test_json_array(self, scenario_a):
        data = json.loads(parse_brisnet_pp_to_json(scenario_a))
        assert [h["post"] for h in data] == [3, 5]
        assert data[0]["jockey"] == {"name": "", "record": ""}
        assert data[0]["past_performances"] == []

    def test_json_keeps_unicode(self, sample_card):
        text = parse_brisnet_pp_to_json(sample_card)
        assert "ñ Won last race" in text
        rows = json.loads(text)[0]["past_performances"]
        assert rows[0]["racetype"] == "OC40k"

    def test_json_empty(self):
        assert json.loads(parse_brisnet_pp_to_json("")) == []

    def test_records_dataframe(self, sample_card):
        df = records_to_dataframe(parse_document(sample_card))
        assert list(df.columns) == RECORD_COLUMNS
        assert len(df) == 2
        assert df["post"].tolist() == [1, 2]
        assert df.loc[0, "jockey"] == "BARRIOS RICARDO"
        assert df.loc[0, "past_performances"] == 2
        assert df.loc[0, "surface_lines"] == 2

    def test_missing_post_is_na(self):
        df = records_to_dataframe(parse_document("no anchors here"))
        assert df["post"].dtype == "Int64"
        assert df["post"].isna().all()

    def test_empty_records_dataframe(self):
        df = records_to_dataframe([])
        assert list(df.columns) == RECORD_COLUMNS
        assert df.empty

    def test_past_performance_dataframe(self, sample_card):
        df = past_performances_to_dataframe(parse_document(sample_card))
        assert list(df.columns) == PP_ROW_COLUMNS
        assert len(df) == 2
        assert df["name"].unique().tolist() == ["Way of Appeal"]
        assert df.loc[1, "racetype"] == "Mdn 62k"
        assert isinstance(df, pd.DataFrame)


# ═══════════════════════════════════════════════════════════════════════════
# 4. Command line
# ═══════════════════════════════════════════════════════════════════════════


class TestMain:
    def test_prints_json(self, tmp_path, capsys, scenario_a):
        path = tmp_path / "card.txt"
        path.write_text(scenario_a, encoding="utf-8")
        assert main([str(path)]) == 0
        out = capsys.readouterr().out
        assert [h["name"] for h in json.loads(out)] == ["SECRETARIAT", "SEABISCUIT"]

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.txt")]) == 2
        assert "File not found" in capsys.readouterr().err

    def test_usage(self, capsys):
        assert main([]) == 2
        assert "usage" in capsys.readouterr().err
