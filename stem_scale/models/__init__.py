"""Domain models for the stem_scale package.

This module provides a centralized location for all data models used by the
stem measurement pipeline. It includes:

- Core domain models (Run, PeakRange, ScaleStats, StemScaleResult)
- Page description consumed from upstream processing (Page, SystemRegion,
  SymbolInstance and geometry variants)
- Configuration parameters (StemScaleParams)
- Pipeline stage results and visualization containers

All models are built using Pydantic for data validation, ensuring type
safety and clear interfaces between pipeline components.
"""

# Re-export core models
from stem_scale.models.core_models import (
    Orientation,
    Run,
    PeakRange,
    ScaleStats,
    StemScaleResult,
)

# Re-export page models
from stem_scale.models.page_models import (
    Shape,
    STRUCTURAL_SHAPES,
    BoxGeometry,
    LineGeometry,
    PolygonGeometry,
    MaskGeometry,
    Geometry,
    SymbolInstance,
    HeaderArea,
    SystemRegion,
    SourceKey,
    Page,
)

# Re-export setting models
from stem_scale.models.settings_models import StemScaleParams, DEFAULT_ERASED_SHAPES

# Re-export pipeline models
from stem_scale.models.pipeline_models import ErasureResult, MeasurementSnapshot

# Re-export visualization models
from stem_scale.models.visualization_models import VisualizationSet
