import os
import concurrent.futures

import numpy as np

try:
    from . import catalog, core
    from .constants import OUTPUT_EXTENSIONS
    from .gallery import JsonGallery
    from .sources import is_frame_file
except ImportError:
    from camera_evolution import catalog, core
    from camera_evolution.constants import OUTPUT_EXTENSIONS
    from camera_evolution.gallery import JsonGallery
    from camera_evolution.sources import is_frame_file


def _output_name(frame_path, era_id, image_format):
    stem = os.path.splitext(os.path.basename(frame_path))[0]
    return f"{stem}-{era_id}.{OUTPUT_EXTENSIONS[image_format]}"


def process_path(
    input_path,
    output_path,
    era,
    aspect,
    jobs,
    logger_func, # A function to handle logging, e.g., print or queue.put
    image_format: str = 'jpeg',
    seed=None,
    gallery_dir=None,
):
    """
    Captures a single frame file or every frame file in a directory.
    Finished artifacts are added to the gallery at `gallery_dir` if given.
    """

    def log_message(msg):
        if hasattr(logger_func, 'put'):
            logger_func.put(msg)
        else:
            logger_func(msg)

    def send_signal(data):
        if hasattr(logger_func, 'put'):
            logger_func.put(data)

    era_id = catalog.get_era(era).id
    aspect_id = catalog.get_format(aspect).id
    log_queue = logger_func if hasattr(logger_func, 'put') else None
    gallery = JsonGallery(gallery_dir, _log=log_message) if gallery_dir else None
    artifacts = []

    # --- Task Definition ---
    is_batch = os.path.isdir(input_path)

    if is_batch:
        if not os.path.isdir(output_path):
            error_msg = "For batch processing, the output path must be a directory."
            log_message(f"❌ Error: {error_msg}")
            raise ValueError(error_msg)

        frame_files = sorted(f for f in os.listdir(input_path) if is_frame_file(f))

        if not frame_files:
            log_message("⚠️ No supported frame files found in the input directory.")
            return artifacts # Don't raise an error, just inform the user.

        count = len(frame_files)
        log_message(f"🔍 Found {count} frames for parallel processing.")
        send_signal({'total_files': count})

        # Independent streams per file, reproducible when a seed is given.
        if seed is not None:
            seeds = np.random.SeedSequence(seed).spawn(count)
        else:
            seeds = [None] * count

        with concurrent.futures.ProcessPoolExecutor(max_workers=jobs) as executor:
            futures = {}
            for filename, file_seed in zip(frame_files, seeds):
                future = executor.submit(
                    core.process_frame_file,
                    frame_path=os.path.join(input_path, filename),
                    output_path=os.path.join(output_path, _output_name(filename, era_id, image_format)),
                    era=era_id,
                    aspect=aspect_id,
                    image_format=image_format,
                    seed=file_seed,
                    log_queue=log_queue,
                )
                futures[future] = filename

            for future in concurrent.futures.as_completed(futures):
                filename = futures[future]
                try:
                    artifact = future.result()
                    artifacts.append(artifact)
                    if gallery is not None:
                        gallery.append(artifact)
                except Exception as exc:
                    log_msg = f"❌ Generated an exception: {exc}"
                    if log_queue is not None:
                        log_queue.put({'id': filename, 'msg': log_msg})
                    else:
                        log_message(f"[{filename}] {log_msg}")
                finally:
                    send_signal({'status': 'done'})

        log_message("\n🎉 Batch processing complete.")

    else: # Single file processing
        send_signal({'total_files': 1})
        log_message("⚙️ Processing single frame...")

        if os.path.isdir(output_path):
            final_output_path = os.path.join(output_path, _output_name(input_path, era_id, image_format))
        else:
            final_output_path = output_path

        try:
            artifact = core.process_frame_file(
                frame_path=input_path,
                output_path=final_output_path,
                era=era_id,
                aspect=aspect_id,
                image_format=image_format,
                seed=seed,
                log_queue=log_queue,
            )
            artifacts.append(artifact)
            if gallery is not None:
                gallery.append(artifact)
        finally:
            send_signal({'status': 'done'})
            log_message("\n🎉 Single frame processing complete.")

    return artifacts
