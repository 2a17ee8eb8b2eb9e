"""Tests for the naming-template compiler."""

import logging
import random

import pytest

from pcap_filelist.naming.pattern import (
    ABSENT,
    INT64_MAX,
    compile_template,
    parse_field,
)


class TestGroupOrdinals:
    def test_thread_before_timestamp(self):
        rule = compile_template("log.%n.%t.pcap")
        assert rule.thread_group == 1
        assert rule.timestamp_group == 2

    def test_timestamp_before_thread(self):
        rule = compile_template("log.%t.%n.pcap")
        assert rule.timestamp_group == 1
        assert rule.thread_group == 2

    def test_timestamp_only(self):
        rule = compile_template("%t")
        assert rule.thread_group == ABSENT
        assert rule.timestamp_group == 1
        assert not rule.uses_thread

    def test_thread_id_used_when_no_thread_number(self):
        rule = compile_template("log.%t.%i.pcap")
        assert rule.thread_group == 2
        assert rule.timestamp_group == 1

    def test_thread_number_wins_over_thread_id(self):
        rule = compile_template("log.%i.%t.%n.pcap")
        # %n is the thread token; %i only stands for digits.
        assert rule.pattern.groups == 2
        assert rule.timestamp_group == 1
        assert rule.thread_group == 2
        m = rule.classify("log.77.1000.3.pcap")
        assert m.status == "matched"
        assert m.thread == 3
        assert m.timestamp == 1000


class TestMatching:
    @pytest.mark.parametrize(
        "template",
        [
            "log.%n.%t.pcap",
            "log.%t.%n.pcap",
            "log.pcap.%t",
            "eve-%i-%t.pcap",
            "%t_%i",
            "log.%i.%t.%n.pcap",
            "cap(%t)[%n]+%i",
        ],
    )
    def test_generated_names_extract_their_digits(self, template):
        rng = random.Random(template)
        rule = compile_template(template)
        for _ in range(50):
            values = {tok: str(rng.randrange(10 ** rng.randint(1, 18))).zfill(rng.randint(1, 3))
                      for tok in ("%n", "%i", "%t")}
            name = template
            for tok, digits in values.items():
                name = name.replace(tok, digits, 1)
            if "%n" in template:
                thread = int(values["%n"])
            elif "%i" in template:
                thread = int(values["%i"])
            else:
                thread = None

            m = rule.classify(name)
            assert m.status == "matched", name
            assert m.thread == thread
            assert m.timestamp == int(values["%t"])

    def test_literal_text_is_escaped(self):
        rule = compile_template("log.%n.%t.pcap")
        # "." must not act as a wildcard.
        assert not rule.matches("logX1.100.pcap")
        assert not rule.matches("log.1.100Xpcap")

    def test_metacharacters_in_template(self):
        rule = compile_template("cap(+)[%n]*%t?.pcap")
        assert rule.matches("cap(+)[3]*99?.pcap")
        assert not rule.matches("cap+[3]99.pcap")

    def test_whole_name_must_match(self):
        rule = compile_template("log.%n.%t.pcap")
        assert not rule.matches("old.log.1.100.pcap")
        assert not rule.matches("log.1.100.pcap.gz")

    def test_non_numeric_field_is_unmatched(self):
        rule = compile_template("log.%n.%t.pcap")
        assert rule.classify("log.a.100.pcap").status == "unmatched"
        assert rule.classify("log.1.abc.pcap").status == "unmatched"

    def test_non_ascii_digits_rejected(self):
        rule = compile_template("log.%t")
        assert not rule.matches("log.١٢")

    def test_only_first_occurrence_is_a_token(self):
        rule = compile_template("%t.%t")
        assert rule.pattern.groups == 1
        assert rule.matches("12.%t")
        assert not rule.matches("12.13")

    def test_template_without_tokens_rejects_everything(self):
        rule = compile_template("log.pcap")
        assert not rule.matches("log.pcap")
        assert not rule.matches("anything")

    def test_thread_only_template_matches_without_timestamp(self):
        rule = compile_template("log.%n.pcap")
        assert rule.uses_thread
        assert not rule.has_timestamp
        m = rule.classify("log.7.pcap")
        assert m.status == "matched"
        assert m.thread == 7
        assert m.timestamp is None
        assert not rule.matches("log.x.pcap")

    def test_overflowing_timestamp_is_invalid(self):
        rule = compile_template("log.%n.%t.pcap")
        m = rule.classify("log.1.99999999999999999999.pcap")
        assert m.conforms
        assert m.status == "invalid"
        assert m.timestamp is None
        assert m.thread == 1

    def test_overflowing_thread_is_invalid(self):
        m = compile_template("log.%n.%t.pcap").classify("log.99999999999999999999.5.pcap")
        assert m.status == "invalid"
        assert not m.thread_valid
        assert m.timestamp == 5

    def test_compiled_regexp_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pcap_filelist"):
            rule = compile_template("log.%n.%t.pcap")
        assert rule.pattern.pattern in caplog.text


class TestParseField:
    def test_bounds(self):
        assert parse_field(str(INT64_MAX)) == INT64_MAX
        assert parse_field(str(INT64_MAX + 1)) is None
        assert parse_field("007") == 7
        assert parse_field(None) is None
