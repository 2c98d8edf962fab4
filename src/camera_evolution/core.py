import os
import time
from typing import Optional

import numpy as np

try:
    from . import catalog, effects, encoder, sources, tone
    from .crop import crop_rect
    from .errors import MissingSource
    from .frames import CaptureArtifact, PixelBuffer
    from .quantize import quantize
    from .utils import make_logger
except ImportError:
    from camera_evolution import catalog, effects, encoder, sources, tone
    from camera_evolution.crop import crop_rect
    from camera_evolution.errors import MissingSource
    from camera_evolution.frames import CaptureArtifact, PixelBuffer
    from camera_evolution.quantize import quantize
    from camera_evolution.utils import make_logger

# ==========================================
#              PIPELINE
# ==========================================

def _render(frame, era, aspect, rng, _log) -> PixelBuffer:
    if frame is None:
        raise MissingSource("No frame available to capture")

    # --- Step 1: Crop ---
    rect = crop_rect(frame.width, frame.height, aspect.aspect)
    _log(f"  🔹 [Step 1] Crop {frame.width}x{frame.height} -> "
         f"({rect.x:.1f}, {rect.y:.1f}, {rect.w:.1f}, {rect.h:.1f}) for {aspect.id}")

    # --- Step 2: Tone ---
    _log(f"  🔹 [Step 2] Tone ({len(era.tone)} adjustments, {era.exposure} exposure)")
    buffer = tone.render_tone(frame, rect, era, aspect.size, _log=_log)

    # --- Step 3: Color depth ---
    if era.full_color:
        _log("  🔹 [Step 3] Full color, skipping quantization.")
    else:
        _log(f"  🔹 [Step 3] Quantizing to {era.color_depth}-bit ({2 ** era.color_depth} levels)")
        quantize(buffer, era.color_depth)

    # --- Step 4: Era effects ---
    passes = effects.passes_for(era)
    _log(f"  🔹 [Step 4] Compositing {len(passes)} {era.id} passes")
    effects.apply_effects(buffer, era, rng=rng, _log=_log)

    return buffer


def render(frame, era, aspect, rng: Optional[np.random.Generator] = None,
           log_queue: Optional[object] = None, source_id: str = 'frame') -> PixelBuffer:
    """
    Crop, tone, quantize and composite `frame` for an era and aspect format.
    Returns the final buffer without encoding it.
    """
    _log = make_logger(source_id, log_queue)
    return _render(frame, catalog.get_era(era), catalog.get_format(aspect), rng, _log)


def capture(
    frame,
    era,
    aspect,
    rng: Optional[np.random.Generator] = None,
    image_format: str = 'jpeg',
    log_queue: Optional[object] = None,
    source_id: str = 'frame',
) -> CaptureArtifact:
    """
    Run the full pipeline on one frame and return the encoded artifact.

    `era` and `aspect` may be catalog objects or identifiers. Randomized
    eras draw from `rng`; leave it out for an unseeded generator. Raises a
    PipelineError subclass when the capture fails; nothing is returned in
    that case.
    """
    _log = make_logger(source_id, log_queue)
    era = catalog.get_era(era)
    aspect = catalog.get_format(aspect)

    _log(f"📸 [Capture] {era.label}, {aspect.id} {aspect.width}x{aspect.height}")
    buffer = _render(frame, era, aspect, rng, _log)

    # --- Step 5: Encode ---
    _log(f"  🔹 [Step 5] Encoding {image_format}...")
    data = encoder.encode(buffer, image_format=image_format)

    artifact = CaptureArtifact(
        data=data,
        era_id=era.id,
        era_name=era.name,
        format_id=aspect.id,
        timestamp=int(time.time() * 1000),
        width=buffer.width,
        height=buffer.height,
        image_format=image_format,
    )
    _log(f"  ✅ Captured {len(data)} bytes")
    return artifact


def process_frame_file(
    frame_path: str,
    output_path: str,
    era,
    aspect,
    image_format: str = 'jpeg',
    seed=None,
    log_queue: Optional[object] = None,
) -> CaptureArtifact:
    """
    Load a frame from disk, capture it and write the encoded bytes to
    `output_path`. `seed` may be an int or a numpy SeedSequence.
    """
    source_id = os.path.basename(frame_path)
    _log = make_logger(source_id, log_queue)

    _log(f"🧪 Loading frame: {frame_path}")
    frame = sources.load_frame(frame_path)
    rng = np.random.default_rng(seed)

    artifact = capture(
        frame, era, aspect,
        rng=rng,
        image_format=image_format,
        log_queue=log_queue,
        source_id=source_id,
    )

    _log(f"  💾 Saving to {os.path.basename(output_path)}...")
    with open(output_path, 'wb') as f:
        f.write(artifact.data)
    _log(f"  ✅ Saved: {output_path}")
    return artifact
