"""
Unit tests for Iris dataset loading.

Tests best-effort CSV ingestion, diagnostics for skipped rows, I/O
failures and dataset summary extraction.
"""

import logging
import os

import pytest

from iris_knn.classifier import IrisDetector
from iris_knn.dataset_loader import get_dataset_info, load_training_data, parse_row
from iris_knn.store import ExampleStore, LabeledPoint


LOADER_LOGGER = "iris_knn.dataset_loader"
IRIS_CSV = os.path.join(os.path.dirname(__file__), '..', 'data', 'iris.csv')


@pytest.fixture
def write_csv(tmp_path):
    """Write lines to a CSV file and return its path."""
    def _write(lines, name="train.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return str(path)
    return _write


def skipped_messages(caplog):
    return [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]


def test_load_valid_rows(write_csv):
    """Test that every valid row becomes a LabeledPoint, in order."""
    path = write_csv([
        "5.1,3.5,1.4,0.2,Iris-setosa",
        "7.0,3.2,4.7,1.4,Iris-versicolor",
        "6.3,3.3,6.0,2.5,Iris-virginica",
    ])
    store = load_training_data(path)

    assert len(store) == 3
    assert [p.label for p in store.all()] == ["Iris-setosa", "Iris-versicolor", "Iris-virginica"]
    assert store.all()[0].features == (5.1, 3.5, 1.4, 0.2)


def test_load_trims_label_whitespace(write_csv):
    """Test that labels are trimmed."""
    store = load_training_data(write_csv(["1,2,3,4,  Iris-setosa  "]))
    assert store.all()[0].label == "Iris-setosa"


def test_load_handles_crlf_line_endings(tmp_path):
    """Test that Windows line endings do not leak into labels."""
    path = tmp_path / "crlf.csv"
    path.write_bytes(b"1,2,3,4,A\r\n5,6,7,8,B\r\n")

    store = load_training_data(str(path))
    assert [p.label for p in store.all()] == ["A", "B"]


def test_one_malformed_row_skipped_with_one_diagnostic(write_csv, caplog):
    """Test that a malformed row is skipped and reported once."""
    caplog.set_level(logging.WARNING, logger=LOADER_LOGGER)
    path = write_csv([
        "1,1,1,1,X",
        "2,2,abc,2,X",
        "10,10,10,10,Y",
    ])
    store = load_training_data(path)

    assert [p.features for p in store.all()] == [(1.0, 1.0, 1.0, 1.0), (10.0, 10.0, 10.0, 10.0)]
    messages = skipped_messages(caplog)
    assert len(messages) == 1
    assert "2,2,abc,2,X" in messages[0]
    assert "Invalid numeric data" in messages[0]


@pytest.mark.parametrize("line", [
    "1,2,3,4",
    "1,2,3,4,X,extra",
    "just some text",
])
def test_wrong_field_count_skipped(write_csv, caplog, line):
    """Test that rows without exactly five fields are skipped."""
    caplog.set_level(logging.WARNING, logger=LOADER_LOGGER)
    store = load_training_data(write_csv(["1,1,1,1,A", line]))

    assert len(store) == 1
    messages = skipped_messages(caplog)
    assert len(messages) == 1
    assert "Invalid data format" in messages[0]
    assert line in messages[0]


def test_header_row_skipped(write_csv, caplog):
    """Test that a header row is rejected by numeric parsing."""
    caplog.set_level(logging.WARNING, logger=LOADER_LOGGER)
    store = load_training_data(write_csv([
        "sepal_length,sepal_width,petal_length,petal_width,species",
        "1,1,1,1,A",
    ]))

    assert len(store) == 1
    assert len(skipped_messages(caplog)) == 1


@pytest.mark.parametrize("line", ["1,2,nan,4,A", "1,inf,3,4,A"])
def test_non_finite_values_skipped(write_csv, line):
    """Test that NaN and infinity are treated as invalid numbers."""
    assert len(load_training_data(write_csv([line]))) == 0


def test_empty_label_skipped(write_csv, caplog):
    """Test that a row with a blank label is skipped."""
    caplog.set_level(logging.WARNING, logger=LOADER_LOGGER)
    store = load_training_data(write_csv(["1,2,3,4,   "]))

    assert len(store) == 0
    assert "Invalid label" in skipped_messages(caplog)[0]


def test_blank_lines_reported(write_csv, caplog):
    """Test that each blank line is skipped as a wrong field count."""
    caplog.set_level(logging.WARNING, logger=LOADER_LOGGER)
    store = load_training_data(write_csv(["1,1,1,1,A", "", "   ", "2,2,2,2,B"]))

    assert len(store) == 2
    messages = skipped_messages(caplog)
    assert len(messages) == 2
    assert all("Invalid data format" in message for message in messages)


def test_trailing_newline_not_reported(tmp_path, caplog):
    """Test that the newline ending the last row is not a blank line."""
    caplog.set_level(logging.WARNING, logger=LOADER_LOGGER)
    path = tmp_path / "train.csv"
    path.write_text("1,1,1,1,A\n2,2,2,2,B\n")

    assert len(load_training_data(str(path))) == 2
    assert skipped_messages(caplog) == []


@pytest.mark.parametrize("line", ["1_0,2,3,4,A", "1,2,3,4_5,A"])
def test_digit_separators_rejected(write_csv, caplog, line):
    """Test that underscores in numbers are invalid numeric data."""
    caplog.set_level(logging.WARNING, logger=LOADER_LOGGER)
    store = load_training_data(write_csv(["1,1,1,1,A", line]))

    assert len(store) == 1
    messages = skipped_messages(caplog)
    assert len(messages) == 1
    assert "Invalid numeric data" in messages[0]


def test_decode_failure_leaves_store_unchanged(tmp_path):
    """Test that a read error midway adds nothing to the store."""
    path = tmp_path / "broken.csv"
    path.write_bytes(b"1,1,1,1,A\n" * 2000 + b"\xff\xfe,1,1,1,B\n")
    store = ExampleStore([LabeledPoint((0, 0, 0, 0), "Z")])

    with pytest.raises(UnicodeDecodeError):
        load_training_data(str(path), store)

    assert [p.label for p in store.all()] == ["Z"]


def test_detector_keeps_no_partial_data(tmp_path):
    """Test that a failed detector load leaves no training data behind."""
    path = tmp_path / "broken.csv"
    path.write_bytes(b"1,1,1,1,A\n" * 2000 + b"\xff\xfe,1,1,1,B\n")
    detector = IrisDetector()

    with pytest.raises(UnicodeDecodeError):
        detector.load_training_data(str(path))

    assert len(detector.training_data) == 0


def test_load_into_existing_store(write_csv):
    """Test that loading appends to a given store."""
    store = ExampleStore([LabeledPoint((0, 0, 0, 0), "Z")])
    result = load_training_data(write_csv(["1,1,1,1,A"]), store)

    assert result is store
    assert [p.label for p in store.all()] == ["Z", "A"]


def test_load_file_not_found():
    """Test loading from nonexistent file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError) as exc_info:
        load_training_data('/nonexistent/path/iris.csv')

    assert '/nonexistent/path/iris.csv' in str(exc_info.value)


def test_load_directory_raises(tmp_path):
    """Test that an unreadable path propagates an OSError."""
    with pytest.raises(OSError):
        load_training_data(str(tmp_path))


def test_load_bundled_iris():
    """Test the bundled dataset loads all 150 specimens past its header."""
    store = load_training_data(IRIS_CSV)

    assert len(store) == 150
    assert store.labels() == ["Iris-setosa", "Iris-versicolor", "Iris-virginica"]


def test_parse_row():
    point = parse_row("6.5, 3.0, 5.4, 2.4, Iris-virginica")
    assert point.features == (6.5, 3.0, 5.4, 2.4)
    assert point.label == "Iris-virginica"

    assert parse_row("a,b,c,d,e") is None


def test_get_dataset_info():
    """Test extraction of dataset metadata."""
    info = get_dataset_info(load_training_data(IRIS_CSV))

    assert info['labels'] == ["Iris-setosa", "Iris-versicolor", "Iris-virginica"]
    assert info['sample_count'] == 150
    assert info['samples_per_label'] == {
        "Iris-setosa": 50,
        "Iris-versicolor": 50,
        "Iris-virginica": 50,
    }
    assert info['feature_ranges']['sepal_length'] == (4.3, 7.9)
    assert info['feature_ranges']['petal_width'] == (0.1, 2.5)


def test_get_dataset_info_empty():
    """Test dataset info with empty store."""
    info = get_dataset_info(ExampleStore())

    assert info['labels'] == []
    assert info['sample_count'] == 0
    assert info['samples_per_label'] == {}
    assert info['feature_ranges'] == {}
