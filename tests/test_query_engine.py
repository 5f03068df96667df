"""Tests for the roadmap, content and citation query engine."""

import pytest

from geomap.models import PLevel
from geomap.output import query_engine as qe


class TestPriorityScoring:
    def test_weighted_score(self):
        assert qe.calculate_priority_score(100, 50) == pytest.approx(85)

    @pytest.mark.parametrize("score,level", [
        (150, PLevel.P0),
        (100, PLevel.P0),
        (99.9, PLevel.P1),
        (75, PLevel.P1),
        (50, PLevel.P2),
        (49.9, PLevel.P3),
        (0, PLevel.P3),
    ])
    def test_p_level_thresholds(self, score, level):
        assert qe.auto_assign_p_level(score) == level


class TestRoadmap:
    def test_get_item_includes_children(self, populated_db):
        item = qe.get_roadmap_item(populated_db, 1)
        assert item["prompt"] == "best cooling mattress"
        assert len(item["contents"]) == 2
        assert len(item["citations"]) == 6
        assert item["counts"] == {"contents": 2, "citations": 6}

    def test_get_missing(self, populated_db):
        with pytest.raises(ValueError, match="not found"):
            qe.get_roadmap_item(populated_db, 999)

    def test_create(self, tmp_db):
        item = qe.create_roadmap_item(tmp_db, {
            "month": "2025-04", "prompt": "hybrid mattress", "p_level": "P1",
            "enhanced_geo_score": 80, "quick_win_index": 40,
        })
        assert item["id"] == 1
        assert item["p_level"] == "P1"
        assert item["contents"] == []

    def test_create_invalid(self, tmp_db):
        with pytest.raises(ValueError):
            qe.create_roadmap_item(tmp_db, {"month": "April", "prompt": "x", "p_level": "P1"})

    def test_list_page(self, populated_db):
        page = qe.list_roadmap(populated_db, limit=2)
        assert len(page["items"]) == 2
        assert page["pagination"]["total"] == 6
        assert page["items"][0]["enhanced_geo_score"] == 155
        assert "counts" in page["items"][0]

    def test_list_bad_p_level(self, populated_db):
        with pytest.raises(ValueError):
            qe.list_roadmap(populated_db, p_level="P7")

    def test_list_limit_capped(self, populated_db):
        with pytest.raises(ValueError, match="limit"):
            qe.list_roadmap(populated_db, limit=500)

    def test_update(self, populated_db):
        item = qe.update_roadmap_item(populated_db, 2, {"enhanced_geo_score": 160, "category": "Cooling"})
        assert item["enhanced_geo_score"] == 160
        assert item["category"] == "Cooling"

    def test_update_unknown_field(self, populated_db):
        with pytest.raises(ValueError, match="Unknown field"):
            qe.update_roadmap_item(populated_db, 2, {"colour": "red"})

    def test_update_invalid_value(self, populated_db):
        with pytest.raises(ValueError):
            qe.update_roadmap_item(populated_db, 2, {"quick_win_index": 300})

    def test_delete(self, populated_db):
        deleted = qe.delete_roadmap_item(populated_db, 6)
        assert deleted["prompt"] == "mattress warranty guide"
        with pytest.raises(ValueError):
            qe.delete_roadmap_item(populated_db, 6)

    def test_stats(self, populated_db):
        stats = qe.roadmap_stats(populated_db)
        assert stats["total"] == 6
        assert stats["by_p_level"] == {"P0": 2, "P1": 2, "P2": 1, "P3": 1}
        assert stats["by_month"] == {"2025-02": 3, "2025-01": 3}
        assert stats["averages"]["geo_score"] == pytest.approx(638 / 6)


class TestContent:
    def test_create_requires_existing_roadmap(self, tmp_db):
        with pytest.raises(ValueError, match="Roadmap item not found"):
            qe.create_content(tmp_db, {"roadmap_id": 3, "title": "x", "channel": "Blog"})

    def test_get_with_roadmap_and_citations(self, populated_db):
        content = qe.get_content(populated_db, 1)
        assert content["roadmap"]["prompt"] == "best cooling mattress"
        assert {c["platform"] for c in content["citations"]} == {"YouTube", "ChatGPT", "Claude"}

    def test_list_by_channel(self, populated_db):
        page = qe.list_content(populated_db, channel="Blog")
        assert page["pagination"]["total"] == 2
        unlinked = [i for i in page["items"] if i["roadmap"] is None]
        assert unlinked == []

    def test_citation_count_on_items(self, populated_db):
        page = qe.list_content(populated_db, publish_status="published")
        counts = {i["title"][:7]: i["citation_count"] for i in page["items"]}
        assert counts["Blog #1"] == 3
        assert counts["Product"] == 3

    def test_update_status(self, populated_db):
        content = qe.update_content(populated_db, 5, {"publish_status": "published"})
        assert content["publish_status"] == "published"

    def test_stats(self, populated_db):
        stats = qe.content_stats(populated_db)
        assert stats["total"] == 7
        assert stats["by_status"] == {"draft": 1, "planned": 2, "published": 4}
        assert stats["by_channel"]["Blog"] == 2


class TestCitations:
    def test_create_requires_existing_content(self, tmp_db):
        with pytest.raises(ValueError, match="Content not found"):
            qe.create_citation(tmp_db, {"content_id": 9, "platform": "Gemini", "detected_at": "2025-01-01"})

    def test_get_includes_content(self, populated_db):
        citation = qe.get_citation(populated_db, 1)
        assert citation["content"]["channel"] == "Blog"

    def test_strength_must_be_known(self, populated_db):
        with pytest.raises(ValueError):
            qe.update_citation(populated_db, 1, {"citation_strength": 5})

    def test_list_ai_indexed(self, populated_db):
        page = qe.list_citations(populated_db, ai_indexed=True)
        assert page["pagination"]["total"] == 4

    def test_delete(self, populated_db):
        qe.delete_citation(populated_db, 1)
        with pytest.raises(ValueError, match="Citation not found"):
            qe.get_citation(populated_db, 1)

    def test_stats(self, populated_db):
        stats = qe.citation_stats(populated_db)
        assert stats["total"] == 10
        assert stats["ai_indexed"] == 4
        assert stats["index_rate"] == 40.0
        assert stats["by_platform"]["ChatGPT"] == 3

    def test_stats_empty(self, tmp_db):
        assert qe.citation_stats(tmp_db)["index_rate"] == 0
