# -*- coding: utf-8 -*-
"""Tests for models.submission: rendering and parsing submission record embeds."""

import discord
import pytest

from models.submission import (
    REASON_FIELD,
    STATUS_COLOURS,
    STATUS_FIELD,
    AlreadyDecided,
    SubmissionRecord,
    SubmissionStatus,
    parse_applicant_id,
    parse_type_label,
)
from utils.errors import RecordUnparsable


def _record(**overrides):
    values = dict(
        applicant_id=123,
        applicant_tag="alice#0001",
        type_label="Backend Developer",
        field_values={"experience": "Five years of Python", "github": "alice"},
    )
    values.update(overrides)
    return SubmissionRecord(**values)


class TestFooter:
    @pytest.mark.parametrize("applicant_id", ["1", "123", "283746501234567890", "9" * 25])
    def test_recovers_any_id_length(self, applicant_id):
        assert parse_applicant_id(f"alice#0001 ({applicant_id})") == int(applicant_id)

    def test_tag_with_parentheses_inside(self):
        assert parse_applicant_id("Submitted by bob (the builder) (42)") == 42

    def test_missing_id(self):
        with pytest.raises(RecordUnparsable, match="User ID not found"):
            parse_applicant_id("alice#0001")

    def test_id_not_trailing(self):
        with pytest.raises(RecordUnparsable, match="User ID not found"):
            parse_applicant_id("alice (123) was here")

    def test_missing_footer(self):
        with pytest.raises(RecordUnparsable, match="Footer text not found"):
            parse_applicant_id(None)


class TestTitle:
    def test_multi_word_label(self):
        assert parse_type_label("Application for Backend Developer") == "Backend Developer"

    def test_single_word_label(self):
        assert parse_type_label("Application for Designer") == "Designer"

    @pytest.mark.parametrize("title", [None, "", "Application for", "Apply for Designer", "Designer"])
    def test_unparsable(self, title):
        with pytest.raises(RecordUnparsable):
            parse_type_label(title)


class TestRender:
    def test_pending_layout(self, registry):
        embed = _record().to_embed(registry.lookup_by_id("backend"))

        assert embed.title == "Application for Backend Developer"
        assert embed.description == "**Experience:** Five years of Python\n**GitHub:** alice"
        assert embed.footer.text == "Submitted by alice#0001 (123)"
        assert embed.colour == STATUS_COLOURS[SubmissionStatus.PENDING]
        assert [(f.name, f.value) for f in embed.fields] == [(STATUS_FIELD, "Pending")]

    def test_rejected_layout(self, registry):
        record = _record()
        record.reject("Incomplete portfolio")
        embed = record.to_embed(registry.lookup_by_id("backend"))

        assert embed.colour == discord.Colour(0xFF0000)
        assert (embed.fields[-1].name, embed.fields[-1].value) == (REASON_FIELD, "Incomplete portfolio")
        assert embed.fields[0].value == "Rejected"

    def test_accepted_colour_differs_from_pending(self, registry):
        record = _record()
        record.accept()
        embed = record.to_embed(registry.lookup_by_id("backend"))
        assert embed.colour == discord.Colour.green()
        assert embed.colour != STATUS_COLOURS[SubmissionStatus.PENDING]


class TestParse:
    def test_round_trip(self, registry):
        backend = registry.lookup_by_id("backend")
        original = _record(field_values={"experience": "line one\nline two", "github": ""})

        parsed = SubmissionRecord.from_embed(original.to_embed(backend), record_id=55, app_type=backend)

        assert parsed.applicant_id == 123
        assert parsed.applicant_tag == "alice#0001"
        assert parsed.type_label == "Backend Developer"
        assert parsed.field_values == {"experience": "line one\nline two", "github": ""}
        assert parsed.status == SubmissionStatus.PENDING
        assert parsed.record_id == 55

    def test_round_trip_rejected(self, registry):
        original = _record()
        original.reject("Not enough experience")
        parsed = SubmissionRecord.from_embed(original.to_embed(registry.lookup_by_id("backend")))

        assert parsed.status == SubmissionStatus.REJECTED
        assert parsed.rejection_reason == "Not enough experience"
        assert parsed.is_decided

    def test_values_only_with_type(self, registry):
        parsed = SubmissionRecord.from_embed(_record().to_embed(registry.lookup_by_id("backend")))
        assert parsed.field_values == {}

    def test_bare_footer_and_no_status_field(self, registry):
        embed = discord.Embed(title="Application for Backend Developer", description="**Experience:** lots")
        embed.set_footer(text="alice#0001 (123)")

        parsed = SubmissionRecord.from_embed(embed, app_type=registry.lookup_by_id("backend"))

        assert parsed.applicant_id == 123
        assert parsed.applicant_tag == "alice#0001"
        assert parsed.status == SubmissionStatus.PENDING
        assert parsed.field_values == {"experience": "lots", "github": ""}

    def test_reason_without_status_means_rejected(self):
        embed = discord.Embed(title="Application for Designer", description="**Portfolio:** x")
        embed.add_field(name=REASON_FIELD, value="No")
        embed.set_footer(text="Submitted by bob (7)")

        assert SubmissionRecord.from_embed(embed).status == SubmissionStatus.REJECTED

    def test_label_not_checked_against_config(self):
        embed = discord.Embed(title="Application for Astronaut")
        embed.set_footer(text="Submitted by bob (7)")
        assert SubmissionRecord.from_embed(embed).type_label == "Astronaut"

    def test_malformed_footer(self):
        embed = discord.Embed(title="garbage")
        embed.set_footer(text="alice#0001")
        with pytest.raises(RecordUnparsable, match="User ID not found"):
            SubmissionRecord.from_embed(embed)

    def test_unknown_status_value(self, registry):
        embed = _record().to_embed(registry.lookup_by_id("backend"))
        embed.set_field_at(0, name=STATUS_FIELD, value="Escalated")
        with pytest.raises(RecordUnparsable, match="Unknown status"):
            SubmissionRecord.from_embed(embed)


class TestApplyTo:
    def test_keeps_title_description_and_footer(self, registry):
        posted = _record().to_embed(registry.lookup_by_id("backend"))
        record = SubmissionRecord.from_embed(posted)
        record.accept()

        updated = record.apply_to(posted)

        assert updated.description == "**Experience:** Five years of Python\n**GitHub:** alice"
        assert updated.title == posted.title
        assert updated.footer.text == posted.footer.text
        assert updated.colour == STATUS_COLOURS[SubmissionStatus.ACCEPTED]
        assert [(f.name, f.value) for f in updated.fields] == [(STATUS_FIELD, "Accepted")]

    def test_posted_embed_left_untouched(self, registry):
        posted = _record().to_embed(registry.lookup_by_id("backend"))
        record = SubmissionRecord.from_embed(posted)
        record.reject("Incomplete portfolio")

        record.apply_to(posted)

        assert [(f.name, f.value) for f in posted.fields] == [(STATUS_FIELD, "Pending")]
        assert posted.colour == STATUS_COLOURS[SubmissionStatus.PENDING]

    def test_reject_appends_reason(self, registry):
        posted = _record().to_embed(registry.lookup_by_id("backend"))
        record = SubmissionRecord.from_embed(posted)
        record.reject("  Incomplete portfolio\n")

        updated = record.apply_to(posted)

        assert updated.colour == discord.Colour(0xFF0000)
        assert [(f.name, f.value) for f in updated.fields] == [
            (STATUS_FIELD, "Rejected"),
            (REASON_FIELD, "  Incomplete portfolio\n"),
        ]

    def test_status_field_added_to_legacy_record(self):
        posted = discord.Embed(title="Application for Designer", description="**Portfolio:** x")
        posted.add_field(name="Notes", value="n/a")
        posted.set_footer(text="bob (7)")
        record = SubmissionRecord.from_embed(posted)
        record.accept()

        updated = record.apply_to(posted)

        assert [f.name for f in updated.fields] == [STATUS_FIELD, "Notes"]
        assert updated.description == "**Portfolio:** x"


class TestDecisions:
    def test_accept_is_terminal(self):
        record = _record()
        record.accept()
        assert record.status == SubmissionStatus.ACCEPTED
        with pytest.raises(AlreadyDecided):
            record.accept()
        with pytest.raises(AlreadyDecided):
            record.reject("too late")

    def test_reject_is_terminal(self):
        record = _record()
        record.reject("nope")
        assert record.rejection_reason == "nope"
        with pytest.raises(AlreadyDecided):
            record.accept()
