import threading
from typing import Optional

import numpy as np

from . import catalog, core
from .constants import DEFAULT_FORMAT
from .errors import PipelineError
from .gallery import save_download
from .utils import make_logger


class CaptureSession:
    """
    The user's current selection plus the capture-and-store flow.

    Captures run one at a time. The artifact is appended to `store` only
    after encoding succeeds; a failed capture is logged and yields None.
    """

    def __init__(
        self,
        store,
        era=None,
        aspect=DEFAULT_FORMAT,
        download_dir: Optional[str] = None,
        rng: Optional[np.random.Generator] = None,
        log_queue: Optional[object] = None,
    ):
        self.store = store
        self.download_dir = download_dir
        self.rng = rng
        self.log_queue = log_queue
        self._era_index = catalog.era_position(era) if era is not None else 0
        self.aspect = catalog.get_format(aspect)
        self._lock = threading.Lock()
        self._log = make_logger('session', log_queue)

    @property
    def era(self):
        return catalog.ERA_CATALOG[self._era_index]

    def select_era(self, era):
        self._era_index = catalog.era_position(era)
        return self.era

    def next_era(self):
        return self.select_era(catalog.next_era(self.era))

    def previous_era(self):
        return self.select_era(catalog.previous_era(self.era))

    def set_format(self, aspect):
        self.aspect = catalog.get_format(aspect)
        return self.aspect

    def capture(self, frame):
        with self._lock:
            try:
                artifact = core.capture(
                    frame, self.era, self.aspect,
                    rng=self.rng,
                    log_queue=self.log_queue,
                    source_id='session',
                )
            except PipelineError as e:
                self._log(f"❌ Capture failed ({type(e).__name__}): {e}")
                return None

            entry = self.store.append(artifact)
            self._log(f"🖼️ Added to gallery: {entry.id}")
            if self.download_dir:
                path = save_download(artifact, self.download_dir)
                self._log(f"💾 Downloaded: {path}")
            return artifact
