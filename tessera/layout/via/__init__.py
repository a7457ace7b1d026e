"""Via requests and via array generation."""

from tessera.layout.via.params import ViaExpansion, ViaParams, ViaParamsBuilder, ViaSelector
from tessera.layout.via.generators import (
    FixedSizeViaArray, MaxFixedExtensionViaArray, MaxViaArray, ViaArrayDims,
)
