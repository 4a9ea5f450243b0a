import json
import os
import sys
from pathlib import Path

import pytest

# GUI tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import exam_assembler
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from exam_assembler.core.models import AnswerOption, Catalog, Category, Context, Item, Tag


QUESTION_RECORDS = [
    {"frage_id": 1, "fragekategorie_id": 1, "frage_text": "Wer schrieb Faust?", "fragekontext_id": 10, "tags": [100]},
    {"frage_id": 2, "fragekategorie_id": 1, "frage_text": "Wann lebte Goethe?", "tags": []},
    {"frage_id": 3, "fragekategorie_id": 1, "frage_text": "Was ist ein Sonett?", "fragekontext_id": 11, "tags": [101]},
    {"frage_id": 5, "fragekategorie_id": 1, "frage_text": "Nenne ein Drama von Schiller.", "fragekontext_id": 10},
    {"frage_id": 7, "fragekategorie_id": 1, "frage_text": "Was ist ein Reim?", "tags": [100, 101]},
    {"frage_id": 9, "fragekategorie_id": 1, "frage_text": "Was ist eine Ballade?"},
    {"frage_id": 4, "fragekategorie_id": 2, "frage_text": "2 + 2 = ?"},
    {"frage_id": 6, "fragekategorie_id": 2, "frage_text": "Wurzel aus 81?"},
    {"frage_id": 8, "fragekategorie_id": 3, "frage_text": "Hauptstadt von Frankreich?"},
    {"frage_id": 12, "fragekategorie_id": 4, "frage_text": "Was ist Photosynthese?"},
]

METADATA = {
    "fragetags": [
        {"tagid": 100, "tagname": "Klassik"},
        {"tagid": 101, "tagname": "Lyrik"},
    ],
    "fragekategorie": [
        {"kategorieid": 1, "kategoriename": "Deutsch"},
        {"kategorieid": 2, "kategoriename": "Mathematik"},
        {"kategorieid": 3, "kategoriename": "Geographie"},
        {"kategorieid": 4, "kategoriename": "Biologie"},
    ],
    "fragekontext": [
        {"fragekontext_id": 10, "fragekontext_quelle": "Faust I"},
        {"fragekontext_id": 11, "fragekontext_quelle": "Sonette an Orpheus"},
    ],
    "antwortoption": [
        {"frage_id": 1, "option_id": "a", "option_text": "Goethe", "option_correct": True},
        {"frage_id": 1, "option_id": "b", "option_text": "Schiller", "option_correct": False},
        {"frage_id": 4, "option_id": "a", "option_text": "4", "option_correct": True},
    ],
}


def make_items(*specs):
    """Items from (id, category) pairs."""
    return tuple(Item(id=i, category_id=c, text=f"Frage {i}") for i, c in specs)


@pytest.fixture
def question_records():
    return json.loads(json.dumps(QUESTION_RECORDS))


@pytest.fixture
def metadata_payload():
    return json.loads(json.dumps(METADATA))


@pytest.fixture
def catalog() -> Catalog:
    """Ten questions in four categories with contexts, tags and answers."""
    return Catalog(
        items=tuple(Item.from_dict(record) for record in QUESTION_RECORDS),
        categories=tuple(Category.from_dict(c) for c in METADATA["fragekategorie"]),
        contexts=tuple(Context.from_dict(c) for c in METADATA["fragekontext"]),
        tags=tuple(Tag.from_dict(t) for t in METADATA["fragetags"]),
        answers=tuple(AnswerOption.from_dict(a) for a in METADATA["antwortoption"]),
    )


@pytest.fixture
def data_files(tmp_path: Path):
    """The sample questions and metadata written to JSON files."""
    questions = tmp_path / "02-fragen.json"
    metadata = tmp_path / "01-tags-cats.json"
    questions.write_text(json.dumps(QUESTION_RECORDS), encoding="utf-8")
    metadata.write_text(json.dumps(METADATA), encoding="utf-8")
    return questions, metadata


class RecordingSurface:
    """RenderSurface that remembers what it was last told to show."""

    def __init__(self):
        self.available = ()
        self.chosen = ()
        self.marks = {}
        self.counts = {}
        self.total = 0
        self.info = None
        self.calls = []

    def show_available(self, items):
        self.calls.append("show_available")
        self.available = tuple(item.id for item in items)

    def show_chosen(self, items):
        self.calls.append("show_chosen")
        self.chosen = tuple(item.id for item in items)

    def show_marks(self, pool, item_ids):
        self.calls.append("show_marks")
        self.marks[pool] = set(item_ids)

    def show_counts(self, counts, total):
        self.calls.append("show_counts")
        self.counts = dict(counts)
        self.total = total

    def show_info(self, request):
        self.calls.append("show_info")
        self.info = request

    def hide_info(self):
        self.calls.append("hide_info")
        self.info = None


class RecordingSaveSurface:
    def __init__(self):
        self.saved = None

    def save(self, chosen_ids):
        self.saved = list(chosen_ids)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def save_surface():
    return RecordingSaveSurface()
