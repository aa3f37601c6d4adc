"""
Multiprocessing backend for parallel fractal rendering.

Every pixel evaluation reads only immutable render-wide configuration, so
the image is split into contiguous row chunks rendered by independent
worker processes. Chunks cover disjoint index ranges and are copied into
the shared buffer once all workers have finished.
"""

import numpy as np
from typing import Callable, List, Optional
import multiprocessing as mp
import logging
import time
from dataclasses import dataclass
from concurrent.futures import ProcessPoolExecutor, as_completed

from ..config import RenderConfig
from ..core.fractal_types import FractalType
from ..rendering.image import ImageBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowChunk:
    """A block of consecutive image rows rendered as one work unit."""
    chunk_id: int
    row_start: int
    row_stop: int

    @property
    def rows(self) -> int:
        return self.row_stop - self.row_start


@dataclass
class ChunkResult:
    """Result from rendering a single row chunk."""
    chunk_id: int
    row_start: int
    pixels: np.ndarray
    processing_time: float


def create_row_chunks(height: int, rows_per_chunk: int = 16) -> List[RowChunk]:
    """
    Partition the image rows into contiguous chunks.

    Args:
        height: Total image height
        rows_per_chunk: Target chunk height

    Returns:
        List of RowChunk objects covering every row exactly once
    """
    if rows_per_chunk < 1:
        raise ValueError("rows_per_chunk must be >= 1")

    chunks = []
    for chunk_id, row_start in enumerate(range(0, height, rows_per_chunk)):
        chunks.append(RowChunk(chunk_id, row_start, min(row_start + rows_per_chunk, height)))

    logger.info(f"Created {len(chunks)} row chunks of up to {rows_per_chunk} rows")
    return chunks


def render_row_chunk(args) -> ChunkResult:
    """
    Render a single row chunk in a worker process.

    Args:
        args: Tuple of (fractal, config, chunk)

    Returns:
        ChunkResult object
    """
    from ..api import render_rows

    fractal, config, chunk = args
    start_time = time.time()
    pixels = render_rows(fractal, config, chunk.row_start, chunk.row_stop)

    return ChunkResult(
        chunk_id=chunk.chunk_id,
        row_start=chunk.row_start,
        pixels=pixels,
        processing_time=time.time() - start_time,
    )


def assemble_chunks(chunk_results: List[ChunkResult], image: ImageBuffer) -> None:
    """Copy rendered chunks into their rows of the image buffer."""
    for result in chunk_results:
        image.write_rows(result.row_start, result.pixels)


class MultiprocessingAccelerator:
    """Multiprocessing-based parallel rendering over row chunks."""

    def __init__(self, num_processes: Optional[int] = None, rows_per_chunk: int = 16):
        """
        Initialize multiprocessing accelerator.

        Args:
            num_processes: Number of worker processes (None for CPU count)
            rows_per_chunk: Rows per work unit
        """
        if num_processes is None:
            self.num_processes = get_optimal_process_count()
        else:
            self.num_processes = max(1, num_processes)

        self.rows_per_chunk = rows_per_chunk
        logger.info(f"Multiprocessing accelerator: {self.num_processes} processes, "
                    f"{rows_per_chunk} rows per chunk")

    def render_parallel(self, fractal: FractalType, config: RenderConfig,
                        image: ImageBuffer,
                        progress_callback: Optional[Callable[[float], None]] = None) -> ImageBuffer:
        """
        Render fractal into image using parallel row chunks.

        The fractal and configuration are pickled to the workers, so any
        map function they hold must be defined at module level. A failing
        chunk cancels the chunks still queued and aborts the whole render.

        Args:
            fractal: Fractal type to render
            config: Render configuration
            image: Buffer receiving the result
            progress_callback: Optional callback receiving progress in [0, 1]

        Returns:
            The filled image buffer
        """
        start_time = time.time()

        chunks = create_row_chunks(config.height, self.rows_per_chunk)
        chunk_results: List[ChunkResult] = []

        logger.info(f"Processing {len(chunks)} chunks with {self.num_processes} processes")

        with ProcessPoolExecutor(max_workers=self.num_processes) as executor:
            future_to_chunk = {executor.submit(render_row_chunk, (fractal, config, chunk)): chunk
                               for chunk in chunks}

            for future in as_completed(future_to_chunk):
                chunk = future_to_chunk[future]
                try:
                    chunk_results.append(future.result())
                except Exception as e:
                    logger.error(f"Chunk {chunk.chunk_id} (rows {chunk.row_start}-{chunk.row_stop}) failed: {e}")
                    executor.shutdown(wait=False, cancel_futures=True)
                    raise

                completed = len(chunk_results)
                if progress_callback:
                    progress_callback(completed / len(chunks))
                if completed % max(1, len(chunks) // 10) == 0:
                    progress = (completed / len(chunks)) * 100
                    logger.info(f"Completed {completed}/{len(chunks)} chunks ({progress:.1f}%)")

        logger.info("Assembling chunk results")
        assemble_chunks(chunk_results, image)

        total_time = time.time() - start_time
        total_processing_time = sum(r.processing_time for r in chunk_results)

        logger.info(f"Parallel rendering complete: {total_time:.2f}s total, "
                    f"{total_processing_time:.2f}s processing time")

        return image


def get_optimal_process_count() -> int:
    """Worker count for this machine, leaving one core free on larger hosts."""
    cpu_count = mp.cpu_count()
    if cpu_count <= 2:
        return cpu_count
    return cpu_count - 1
