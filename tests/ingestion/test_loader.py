"""
Collection Loader Tests
=======================

Verifies:
1. Path resolvers are probed in order
2. Missing and malformed files are partial failures, not errors
3. One malformed record never discards the rest of the file
4. The ingestion service registers every collection and freezes the store
"""

import json
import logging

import pytest

from backend.contracts import HadithCollection, StoreFrozenError
from backend.storage import HadithStore
from ingestion import (
    CollectionLoader, CollectionRegistry, IngestionService, LoaderConfig,
    LoadStatus, directory_resolver
)

from tests.fixtures import CHAPTERS, demo_corpus, make_collection, write_corpus


class TestCollectionLoader:

    @pytest.fixture
    def store(self):
        return HadithStore()

    def loader_for(self, *dirs):
        return CollectionLoader(config=LoaderConfig(data_dirs=tuple(dirs)))

    def test_demo_corpus_end_to_end(self, tmp_path, store):
        write_corpus(tmp_path, "demo", demo_corpus())

        report = self.loader_for(tmp_path).load("demo", store)

        assert report.status is LoadStatus.LOADED
        assert report.loaded_count == 2
        assert store.get_hadith("demo-1").grade == "Sahih"
        assert store.get_hadith("demo-2").grade == "Hasan"

    def test_chapter_lookup_populates_book(self, tmp_path, store):
        write_corpus(tmp_path, "demo", demo_corpus())
        self.loader_for(tmp_path).load("demo", store)

        assert store.get_hadith("demo-1").book == "Revelation"
        assert store.get_hadith("demo-2").book == "Belief"
        assert store.get_hadith("demo-1").chapter is None

    def test_unknown_chapter_leaves_book_unset(self, tmp_path, store):
        write_corpus(tmp_path, "demo", {"chapters": CHAPTERS, "hadiths": [{"id": 1, "chapterId": 99}]})
        self.loader_for(tmp_path).load("demo", store)
        assert store.get_hadith("demo-1").book is None

    def test_missing_file_is_not_an_error(self, tmp_path, store, caplog):
        with caplog.at_level(logging.WARNING):
            report = self.loader_for(tmp_path).load("absent", store)

        assert report.status is LoadStatus.FILE_NOT_FOUND
        assert report.loaded_count == 0
        assert store.hadith_count == 0
        assert "absent.json not found" in caplog.text

    def test_malformed_file_is_not_an_error(self, tmp_path, store, caplog):
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            report = self.loader_for(tmp_path).load("broken", store)

        assert report.status is LoadStatus.PARSE_ERROR
        assert report.error
        assert store.hadith_count == 0
        assert "skipping this file" in caplog.text

    def test_non_object_payload_is_a_parse_error(self, tmp_path, store):
        write_corpus(tmp_path, "list", [{"id": 1}])
        report = self.loader_for(tmp_path).load("list", store)
        assert report.status is LoadStatus.PARSE_ERROR

    def test_empty_object_loads_nothing(self, tmp_path, store):
        write_corpus(tmp_path, "empty", {})
        report = self.loader_for(tmp_path).load("empty", store)
        assert report.status is LoadStatus.LOADED
        assert report.loaded_count == 0

    def test_malformed_record_is_skipped(self, tmp_path, store, caplog):
        data = {"hadiths": [{"id": 1}, None, {"id": 3}, "junk"]}
        write_corpus(tmp_path, "mixed", data)

        with caplog.at_level(logging.ERROR):
            report = self.loader_for(tmp_path).load("mixed", store)

        assert report.loaded_count == 2
        assert report.skipped_count == 2
        assert [h.id for h in store.hadiths()] == ["mixed-1", "mixed-3"]
        assert "Error loading hadith" in caplog.text

    def test_unhashable_chapter_id_degrades(self, tmp_path, store):
        data = {"chapters": [{"id": [1], "english": "Odd"}], "hadiths": [{"id": 1, "chapterId": [1]}]}
        write_corpus(tmp_path, "odd", data)

        report = self.loader_for(tmp_path).load("odd", store)

        assert report.loaded_count == 1
        assert store.get_hadith("odd-1").book is None

    def test_duplicate_raw_id_replaces_earlier(self, tmp_path, store):
        data = {"hadiths": [{"id": 1, "arabic": "first"}, {"id": 1, "arabic": "second"}]}
        write_corpus(tmp_path, "dup", data)

        report = self.loader_for(tmp_path).load("dup", store)

        assert report.loaded_count == 2
        assert store.hadith_count == 1
        assert store.get_hadith("dup-1").arabic_text == "second"

    def test_resolvers_probe_in_order(self, tmp_path, store):
        first, second = tmp_path / "first", tmp_path / "second"
        write_corpus(second, "demo", {"hadiths": [{"id": 1, "arabic": "second"}]})
        write_corpus(first, "demo", {"hadiths": [{"id": 1, "arabic": "first"}]})

        loader = CollectionLoader(config=LoaderConfig(
            resolvers=[directory_resolver(first), directory_resolver(second)]
        ))
        report = loader.load("demo", store)

        assert report.file_path == first / "demo.json"
        assert store.get_hadith("demo-1").arabic_text == "first"

    def test_later_resolver_used_when_earlier_misses(self, tmp_path, store):
        write_corpus(tmp_path / "fallback", "demo", {"hadiths": [{"id": 1}]})
        loader = self.loader_for(tmp_path / "primary", tmp_path / "fallback")

        assert loader.locate("demo") == tmp_path / "fallback" / "demo.json"


class TestCollectionRegistry:

    def test_default_registry(self):
        registry = CollectionRegistry.default()
        assert [c.id for c in registry.all_collections()] == ["bukhari", "muslim", "abudawud", "tirmidhi"]
        assert registry.load_order == ("bukhari", "muslim", "tirmidhi", "abudawud")
        assert registry.get("bukhari").total_hadiths == 7563

    def test_load_without_path_is_default(self):
        assert CollectionRegistry.load(None).total_count == 4

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "collections.json"
        path.write_text(json.dumps({
            "collections": [
                {"id": "demo", "name": "Demo", "compiler": "Tester", "totalHadiths": 2},
                {"id": "other", "name": "Other", "compiler": "Tester"},
            ],
            "loadOrder": ["other", "demo"],
        }), encoding="utf-8")

        registry = CollectionRegistry.load(path)

        assert registry.get("demo") == HadithCollection(
            id="demo", name="Demo", compiler="Tester", total_hadiths=2
        )
        assert registry.load_order == ("other", "demo")

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            CollectionRegistry.from_collections([make_collection("a"), make_collection("a")])

    def test_unknown_load_order_rejected(self):
        with pytest.raises(ValueError):
            CollectionRegistry.from_collections([make_collection("a")], ("a", "b"))


class TestIngestionService:

    def service_for(self, data_dir, collection_ids=("demo", "missing")):
        registry = CollectionRegistry.from_collections([make_collection(c) for c in collection_ids])
        loader = CollectionLoader(config=LoaderConfig(data_dirs=(data_dir,)))
        return IngestionService(registry=registry, loader=loader)

    def test_missing_collection_keeps_metadata(self, tmp_path):
        write_corpus(tmp_path, "demo", demo_corpus())
        service = self.service_for(tmp_path)

        store = service.build_store()

        assert [c.id for c in store.collections()] == ["demo", "missing"]
        assert store.hadith_count == 2
        statuses = {r.collection_id: r.status for r in service.reports}
        assert statuses == {"demo": LoadStatus.LOADED, "missing": LoadStatus.FILE_NOT_FOUND}

    def test_all_files_missing_is_a_valid_state(self, tmp_path):
        store = self.service_for(tmp_path).build_store()
        assert store.collection_count == 2
        assert store.hadith_count == 0

    def test_store_is_frozen_after_build(self, tmp_path):
        store = self.service_for(tmp_path).build_store()
        assert store.frozen
        with pytest.raises(StoreFrozenError):
            store.add_collection(make_collection("late"))

    def test_load_order_fixes_iteration_order(self, tmp_path):
        write_corpus(tmp_path, "a", {"hadiths": [{"id": 1}, {"id": 2}]})
        write_corpus(tmp_path, "b", {"hadiths": [{"id": 1}]})
        registry = CollectionRegistry.from_collections(
            [make_collection("a"), make_collection("b")], ("b", "a")
        )
        service = IngestionService(
            registry=registry,
            loader=CollectionLoader(config=LoaderConfig(data_dirs=(tmp_path,)))
        )

        store = service.build_store()

        assert [h.id for h in store.hadiths()] == ["b-1", "a-1", "a-2"]
