"""R Markdown render pipeline and fragment cleanup."""

from rbridge.rendering.fragment import extract_body, extract_fragment
from rbridge.rendering.pipeline import RenderJob, RenderPipeline, RenderStage

__all__ = [
    "extract_body",
    "extract_fragment",
    "RenderJob",
    "RenderPipeline",
    "RenderStage",
]
