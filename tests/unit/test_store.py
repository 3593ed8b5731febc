"""
Unit tests for movie_catalog/catalog/store.py

Coverage plan
─────────────
load        → missing file, header skip, blank lines, bad lines, bad bytes,
              read failure partway, idempotence
save        → header + encoded lines, I/O failure keeps memory
get_all     → defensive copy
add         → append + persist, failure leaves record in memory
remove_at   → bounds, shifting, persistence
replace_at  → bounds, single save, moves to end
import_file → partial success, missing file, single save, no save on zero,
              bad bytes, read failure partway
"""

from pathlib import Path

import pytest

HEADER = "title,year,director,rating,runtimeMinutes,votes,watched"


def _record(title: str = "Alien", year: int = 1979, rating: float = 8.5,
            watched: bool = False):
    from movie_catalog.catalog.models import MovieRecord
    return MovieRecord(
        title=title,
        year=year,
        director="Ridley Scott",
        rating=rating,
        runtime_minutes=117,
        votes=900000,
        watched=watched,
    )


@pytest.fixture
def catalog_path(tmp_path) -> Path:
    return tmp_path / "movies.csv"


@pytest.fixture
def store(catalog_path):
    """Fresh MovieStore bound to a not-yet-existing file."""
    from movie_catalog.catalog.store import MovieStore
    return MovieStore(catalog_path)


def _write(path: Path, *lines: str) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# ─────────────────────────────────────────────────────────────────────────────
# 1. Loading
# ─────────────────────────────────────────────────────────────────────────────

class TestMovieStoreLoad:

    def test_missing_file_gives_empty_store(self, store, catalog_path):
        assert store.get_all() == []
        assert not catalog_path.exists()

    def test_loads_records_and_skips_header(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        _write(catalog_path, HEADER,
               "Alien,1979,Ridley Scott,8.5,117,900000,false",
               "The Thing,1982,John Carpenter,8.2,109,450000,yes")
        store = MovieStore(catalog_path)
        titles = [r.title for r in store.get_all()]
        assert titles == ["Alien", "The Thing"]

    def test_header_detection_is_case_insensitive(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        _write(catalog_path, "TITLE,YEAR,DIRECTOR,RATING,RUNTIME,VOTES,WATCHED",
               "Alien,1979,Ridley Scott,8.5,117,900000,false")
        assert len(MovieStore(catalog_path)) == 1

    def test_file_without_header_loads_first_line(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        _write(catalog_path, "Alien,1979,Ridley Scott,8.5,117,900000,false")
        assert len(MovieStore(catalog_path)) == 1

    def test_blank_and_invalid_lines_are_skipped(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        _write(catalog_path, HEADER,
               "",
               "Alien,1979,Ridley Scott,8.5,117,900000,false",
               "   ",
               "Bad,abcd,X,5,90,10,no",
               "The Thing,1982,John Carpenter,8.2,109,450000,yes")
        store = MovieStore(catalog_path)
        assert len(store) == 2
        assert len(store.load_errors) == 1
        assert store.load_errors[0].line_number == 5
        assert "abcd" in store.load_errors[0].message

    def test_fully_invalid_file_gives_empty_store(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        _write(catalog_path, "garbage", "more garbage")
        store = MovieStore(catalog_path)
        assert store.get_all() == []
        assert len(store.load_errors) == 2

    def test_load_is_idempotent(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        _write(catalog_path, HEADER, "Alien,1979,Ridley Scott,8.5,117,900000,false")
        store = MovieStore(catalog_path)
        store.load()
        first = store.get_all()
        store.load()
        assert store.get_all() == first
        assert len(first) == 1

    def test_undecodable_file_does_not_raise(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        catalog_path.write_bytes(b"\xff\xfe\x00bad bytes\n")
        store = MovieStore(catalog_path)
        assert store.get_all() == []
        assert store.load_errors[0].line_number == 1
        assert "UTF-8" in store.load_errors[0].message

    def test_bad_byte_only_skips_its_own_line(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        good = [f"Movie {i},2000,Some Director,5.0,90,100,no".encode() for i in range(50)]
        bad = b"Caf\xe9 Horror,2001,Some Director,6.0,95,10,no"
        catalog_path.write_bytes(
            HEADER.encode() + b"\n" + b"\n".join(good[:25] + [bad] + good[25:]) + b"\n"
        )
        store = MovieStore(catalog_path)
        assert len(store) == 50
        assert [e.line_number for e in store.load_errors] == [27]

        store.add(_record("Added later"))
        reloaded = MovieStore(catalog_path)
        assert len(reloaded) == 51
        assert reloaded.get_all()[-1].title == "Added later"

    def test_utf8_text_and_bom_are_accepted(self, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        catalog_path.write_bytes(
            "\ufeffLa Llorona,2019,Jayro Bustamante,6.7,97,5000,no\n".encode("utf-8")
        )
        store = MovieStore(catalog_path)
        assert [r.title for r in store.get_all()] == ["La Llorona"]

    def test_read_failure_keeps_records_read_so_far(self, catalog_path, monkeypatch):
        from movie_catalog.catalog.store import LineError, MovieStore
        catalog_path.write_text(HEADER + "\n", encoding="utf-8")

        def failing_scan(path):
            yield 2, _record("First")
            yield 3, LineError(3, "Year is not a valid integer: 'abcd'")
            yield 4, _record("Second")
            raise OSError("device went away")

        monkeypatch.setattr(MovieStore, "_scan", staticmethod(failing_scan))
        store = MovieStore(catalog_path)
        assert [r.title for r in store.get_all()] == ["First", "Second"]
        assert [e.line_number for e in store.load_errors] == [3, 0]
        assert "device went away" in store.load_errors[-1].message


# ─────────────────────────────────────────────────────────────────────────────
# 2. Saving + get_all
# ─────────────────────────────────────────────────────────────────────────────

class TestMovieStoreSave:

    def test_add_persists_header_and_line(self, store, catalog_path):
        store.add(_record())
        lines = catalog_path.read_text(encoding="utf-8").splitlines()
        assert lines == [HEADER, "Alien,1979,Ridley Scott,8.5,117,900000,false"]

    def test_add_then_reload_round_trips(self, store, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        store.add(_record("Alien"))
        rec = _record("Hereditary", year=2018, rating=7.3, watched=True)
        store.add(rec)
        reloaded = MovieStore(catalog_path).get_all()
        assert reloaded[-1] == rec
        assert reloaded == store.get_all()

    def test_duplicates_are_allowed(self, store):
        store.add(_record())
        store.add(_record())
        assert len(store) == 2

    def test_get_all_returns_copy(self, store):
        store.add(_record())
        snapshot = store.get_all()
        snapshot.clear()
        assert len(store.get_all()) == 1

    def test_creates_parent_directory(self, tmp_path):
        from movie_catalog.catalog.store import MovieStore
        store = MovieStore(tmp_path / "nested" / "dir" / "movies.csv")
        store.add(_record())
        assert store.path.exists()

    def test_save_failure_raises_store_error_and_keeps_memory(self, tmp_path):
        from movie_catalog.catalog.store import MovieStore
        from movie_catalog.exceptions import StoreError
        # The bound "file" is a directory, so opening it for writing fails
        target = tmp_path / "is_a_dir"
        target.mkdir()
        store = MovieStore(target)
        with pytest.raises(StoreError):
            store.add(_record())
        assert len(store) == 1


# ─────────────────────────────────────────────────────────────────────────────
# 3. Removal and replacement
# ─────────────────────────────────────────────────────────────────────────────

class TestMovieStoreRemove:

    def test_remove_at_valid_index(self, store, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        store.add(_record("A"))
        store.add(_record("B"))
        store.add(_record("C"))
        assert store.remove_at(1) is True
        assert [r.title for r in store.get_all()] == ["A", "C"]
        assert [r.title for r in MovieStore(catalog_path).get_all()] == ["A", "C"]

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_remove_at_out_of_range(self, store, index):
        store.add(_record("A"))
        store.add(_record("B"))
        assert store.remove_at(index) is False
        assert len(store) == 2

    def test_remove_from_empty_store(self, store, catalog_path):
        assert store.remove_at(0) is False
        assert not catalog_path.exists()

    def test_replace_at_moves_record_to_end(self, store, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        store.add(_record("A"))
        store.add(_record("B"))
        edited = _record("A (edited)", rating=9.0)
        assert store.replace_at(0, edited) is True
        assert [r.title for r in store.get_all()] == ["B", "A (edited)"]
        assert MovieStore(catalog_path).get_all() == store.get_all()

    def test_replace_at_saves_once(self, store, monkeypatch):
        store.add(_record("A"))
        calls = []
        monkeypatch.setattr(store, "save", lambda: calls.append(1))
        store.replace_at(0, _record("B"))
        assert calls == [1]

    def test_replace_at_out_of_range(self, store):
        store.add(_record("A"))
        assert store.replace_at(5, _record("B")) is False
        assert [r.title for r in store.get_all()] == ["A"]


# ─────────────────────────────────────────────────────────────────────────────
# 4. Bulk import
# ─────────────────────────────────────────────────────────────────────────────

class TestMovieStoreImport:

    def test_partial_success(self, store, tmp_path, catalog_path):
        from movie_catalog.catalog.store import MovieStore
        store.add(_record("Existing"))
        source = _write(tmp_path / "import.csv",
                        HEADER,
                        "Alien,1979,Ridley Scott,8.5,117,900000,false",
                        "Bad,abcd,X,5,90,10,no",
                        "The Thing,1982,John Carpenter,8.2,109,450000,yes")
        report = store.import_file(source)
        assert report.inserted == 2
        assert len(report.errors) == 1
        assert report.errors[0].line_number == 3
        assert str(report.errors[0]).startswith("Line 3: ")
        assert len(store) == 3
        assert len(MovieStore(catalog_path)) == 3

    def test_missing_source_short_circuits(self, store, tmp_path, catalog_path):
        report = store.import_file(tmp_path / "nope.csv")
        assert report.inserted == 0
        assert len(report.errors) == 1
        assert "File not found" in report.errors[0].message
        assert not catalog_path.exists()

    def test_no_save_when_nothing_inserted(self, store, tmp_path, monkeypatch):
        source = _write(tmp_path / "bad.csv", "x,y", "also bad")
        calls = []
        monkeypatch.setattr(store, "save", lambda: calls.append(1))
        report = store.import_file(source)
        assert report.inserted == 0
        assert len(report.errors) == 2
        assert calls == []

    def test_saves_once_for_many_lines(self, store, tmp_path, monkeypatch):
        source = _write(tmp_path / "many.csv",
                        *[f"Movie {i},2000,X,5,90,0,no" for i in range(5)])
        calls = []
        monkeypatch.setattr(store, "save", lambda: calls.append(1))
        report = store.import_file(source)
        assert report.inserted == 5
        assert calls == [1]

    def test_import_appends_after_existing(self, store, tmp_path):
        store.add(_record("First"))
        source = _write(tmp_path / "one.csv", "Second,2000,X,5,90,0,no")
        store.import_file(source)
        assert [r.title for r in store.get_all()] == ["First", "Second"]

    def test_summary(self, store, tmp_path):
        source = _write(tmp_path / "s.csv", HEADER, "A,2000,X,5,90,0,no", "bad")
        assert store.import_file(source).summary() == "Inserted: 1, Errors: 1"

    def test_bad_byte_in_source_is_one_diagnostic(self, store, tmp_path):
        source = tmp_path / "latin1.csv"
        source.write_bytes(
            b"A,2000,X,5,90,0,no\n"
            b"Caf\xe9 Horror,2001,X,6,95,10,no\n"
            b"B,2002,X,7,100,0,yes\n"
        )
        report = store.import_file(source)
        assert report.inserted == 2
        assert [e.line_number for e in report.errors] == [2]
        assert [r.title for r in store.get_all()] == ["A", "B"]

    def test_read_failure_mid_file_keeps_inserted_and_saves_once(
        self, store, tmp_path, catalog_path, monkeypatch
    ):
        from movie_catalog.catalog.store import MovieStore
        source = _write(tmp_path / "flaky.csv", "placeholder")

        def failing_scan(path):
            yield 1, _record("Got in")
            raise OSError("read interrupted")

        monkeypatch.setattr(MovieStore, "_scan", staticmethod(failing_scan))
        saves = []
        real_save = store.save
        monkeypatch.setattr(store, "save", lambda: (saves.append(1), real_save()))

        report = store.import_file(source)
        assert report.inserted == 1
        assert len(report.errors) == 1
        assert report.errors[0].line_number == 0
        assert "read interrupted" in report.errors[0].message
        assert saves == [1]
        monkeypatch.undo()
        assert [r.title for r in MovieStore(catalog_path).get_all()] == ["Got in"]
