from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import numpy as np

from imgds.dataset.serialize import read_dataset, write_dataset
from imgds.errors import DatasetFormatError, DatasetIOError
from imgds.types import Dataset


def _sample_dataset(count: int = 4, size: int = 6) -> Dataset:
    rng = np.random.default_rng(11)
    dataset = Dataset()
    labels = ["cat", "dog", "tête", "shark"]
    for idx in range(count):
        image = rng.integers(0, 256, size=(size, size, 3), dtype=np.uint8)
        dataset.append(image, labels[idx % len(labels)], idx % 3)
    return dataset


class DatasetSerializeTests(unittest.TestCase):
    def test_round_trip_preserves_samples_and_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "data.dat"
            source = _sample_dataset()

            write_dataset(path, source)
            loaded = read_dataset(path)

            self.assertEqual(len(loaded), len(source))
            self.assertEqual(loaded.labels, source.labels)
            self.assertEqual(loaded.numeric_labels, source.numeric_labels)
            for got, expected in zip(loaded.images, source.images):
                np.testing.assert_array_equal(got, expected)

    def test_empty_dataset_round_trips(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "empty.dat"
            write_dataset(path, Dataset())
            self.assertEqual(len(read_dataset(path)), 0)

    def test_write_leaves_no_temporary_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_dataset(root / "data.dat", _sample_dataset())
            self.assertEqual([p.name for p in root.iterdir()], ["data.dat"])

    def test_truncated_stream_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "data.dat"
            write_dataset(path, _sample_dataset())
            raw = path.read_bytes()

            for cut in (len(raw) - 3, len(raw) // 2, 10):
                path.write_bytes(raw[:cut])
                with self.subTest(cut=cut):
                    with self.assertRaises(DatasetFormatError):
                        read_dataset(path)

    def test_zip_archive_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "data.dat"
            np.savez(path.with_suffix(".npz"), images=np.zeros((1, 2, 2, 3), dtype=np.uint8))
            path.with_suffix(".npz").rename(path)

            with self.assertRaises(DatasetFormatError):
                read_dataset(path)

            path.write_bytes(b"PK\x03\x04 truncated archive")
            with self.assertRaises(DatasetFormatError):
                read_dataset(path)

    def test_section_length_mismatch_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "data.dat"
            with path.open("wb") as handle:
                np.save(handle, np.zeros((3, 4, 4, 3), dtype=np.uint8))
                np.save(handle, np.array(["a", "b", "c"]))
                np.save(handle, np.array([0, 1], dtype=np.uint64))

            with self.assertRaises(DatasetFormatError):
                read_dataset(path)

    def test_wrong_section_shape_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "data.dat"
            with path.open("wb") as handle:
                np.save(handle, np.zeros((2, 4, 4), dtype=np.uint8))
                np.save(handle, np.array(["a", "b"]))
                np.save(handle, np.array([0, 1], dtype=np.uint64))

            with self.assertRaises(DatasetFormatError):
                read_dataset(path)

    def test_inconsistent_dataset_is_not_written(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "data.dat"
            dataset = _sample_dataset()
            dataset.labels.pop()
            with self.assertRaises(DatasetFormatError):
                write_dataset(path, dataset)
            self.assertFalse(path.exists())

    def test_missing_file_raises_io_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(DatasetIOError):
                read_dataset(Path(tmpdir) / "missing.dat")

    def test_unwritable_destination_raises_io_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            blocker = Path(tmpdir) / "blocker"
            blocker.write_text("not a directory", encoding="utf-8")
            with self.assertRaises(DatasetIOError):
                write_dataset(blocker / "data.dat", _sample_dataset())


if __name__ == "__main__":
    unittest.main()
