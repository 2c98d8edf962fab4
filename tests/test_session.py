import os

import numpy as np

from camera_evolution.errors import EncodingFailure
from camera_evolution.gallery import InMemoryGallery
from camera_evolution.session import CaptureSession


def test_starts_on_first_era_and_square():
    session = CaptureSession(InMemoryGallery())
    assert session.era.id == 'daguerreotype'
    assert session.aspect.id == 'square'


def test_navigation_clamps():
    session = CaptureSession(InMemoryGallery())
    assert session.previous_era().id == 'daguerreotype'
    assert session.next_era().id == 'wet-plate'
    session.select_era('modern')
    assert session.next_era().id == 'modern'


def test_capture_adds_to_store_and_downloads(color_frame, tmp_path):
    store = InMemoryGallery()
    session = CaptureSession(store, era='kodachrome', aspect='portrait', download_dir=str(tmp_path))

    artifact = session.capture(color_frame)

    assert artifact is not None
    assert artifact.format_id == 'portrait'
    [entry] = store.entries()
    assert entry.era == 'Kodachrome'
    assert store.read(entry.id) == artifact.data
    assert os.listdir(tmp_path) == [artifact.filename]


def test_failed_capture_stores_nothing(capsys):
    store = InMemoryGallery()
    session = CaptureSession(store, era='modern')
    assert session.capture(None) is None
    assert store.entries() == []
    assert 'MissingSource' in capsys.readouterr().out


def test_encoding_failure_stores_nothing(color_frame, monkeypatch):
    def fail(*args, **kwargs):
        raise EncodingFailure("disk full")

    monkeypatch.setattr('camera_evolution.encoder.encode', fail)
    store = InMemoryGallery()
    session = CaptureSession(store, era='modern')
    assert session.capture(color_frame) is None
    assert store.entries() == []


def test_seeded_session_is_repeatable(color_frame):
    one = CaptureSession(InMemoryGallery(), era='early-digital', rng=np.random.default_rng(8))
    two = CaptureSession(InMemoryGallery(), era='early-digital', rng=np.random.default_rng(8))
    assert one.capture(color_frame).data == two.capture(color_frame).data


def test_set_format():
    session = CaptureSession(InMemoryGallery())
    assert session.set_format('landscape').size == (1080, 566)
