from .geometry import Vector3, Position2D, ORIGIN
from .parameters import (
    ParameterOverrides, BuildingParameters, DEFAULT_PARAMETERS,
    EstimatorSettings, DEFAULT_SETTINGS,
)
from .solar import (
    SolarPanelSpec, MountingSystemType, MountingSystemConfig, PanelLayoutResult,
    SolarArrayConfig, Location, SolarPanel, InverterConfig, CableTrayConfig,
    ElectricalDesign, COMMON_SOLAR_PANELS, MOUNTING_SYSTEMS,
)
from .structure import (
    StructuralElementType, StructuralElement, MonoPenteStructure,
    OmbriereStructure,
)
from .building import (
    BuildingType, WallType, OpeningType, Opening, CladdingType, RoofingType,
    Finishes, BuildingMetadata, MonoPenteDimensions, OmbriereDimensions,
    OmbriereStructuralVariant, Dimensions, BuildingConfig, ParkingLayout,
    SolarPerformance, MonoPenteBuilding, OmbriereBuilding, Building,
)
from .calculations import (
    ValidationIssue, BuildingValidationResult, CalculationOptions,
    FrameCalculations, OmbriereCalculations,
)
from .nomenclature import (
    NomenclatureCategory, Unit, NomenclatureItem, NomenclatureSection,
    NomenclatureTotals, Nomenclature,
)

__all__ = [
    "Vector3", "Position2D", "ORIGIN",
    "ParameterOverrides", "BuildingParameters", "DEFAULT_PARAMETERS",
    "EstimatorSettings", "DEFAULT_SETTINGS",
    "SolarPanelSpec", "MountingSystemType", "MountingSystemConfig", "PanelLayoutResult",
    "SolarArrayConfig", "Location", "SolarPanel", "InverterConfig", "CableTrayConfig",
    "ElectricalDesign", "COMMON_SOLAR_PANELS", "MOUNTING_SYSTEMS",
    "StructuralElementType", "StructuralElement", "MonoPenteStructure",
    "OmbriereStructure",
    "BuildingType", "WallType", "OpeningType", "Opening", "CladdingType", "RoofingType",
    "Finishes", "BuildingMetadata", "MonoPenteDimensions", "OmbriereDimensions",
    "OmbriereStructuralVariant", "Dimensions", "BuildingConfig", "ParkingLayout",
    "SolarPerformance", "MonoPenteBuilding", "OmbriereBuilding", "Building",
    "ValidationIssue", "BuildingValidationResult", "CalculationOptions",
    "FrameCalculations", "OmbriereCalculations",
    "NomenclatureCategory", "Unit", "NomenclatureItem", "NomenclatureSection",
    "NomenclatureTotals", "Nomenclature",
]
