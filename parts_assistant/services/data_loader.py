import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core import ProductRecord
from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SAMPLE_PRODUCT_DATA: List[Dict[str, Any]] = [
    {
        "part_number": "PS11752778",
        "name": "Refrigerator Door Shelf Bin",
        "description": "This refrigerator door bin is a clear plastic shelf that attaches to the inside of the fresh food door",
        "category": "Refrigerator",
        "brand": "Whirlpool",
        "manufacturer_part_number": "WPW10321304",
        "product_type": "Door Bin",
        "compatible_models": ["WRS325SDHZ", "WRF555SDFZ", "MFI2570FEZ", "WDT780SAEM1"],
        "replacement_parts": ["WPW10321304", "W10321304", "AP6019471"],
        "symptoms": ["Door won't open or close", "Ice or frost buildup"],
        "installation": "Open the refrigerator door. Lift the old bin up and out of the door liner. Slide the new bin down onto the door supports until it seats.",
        "troubleshooting": "If the bin wobbles, check that both side tabs are fully engaged in the door liner supports.",
        "price": "$44.95",
        "in_stock": True,
        "url": "https://www.partselect.com/PS11752778-Whirlpool-WPW10321304-Refrigerator-Door-Shelf-Bin.htm",
    },
    {
        "part_number": "PS11746591",
        "name": "Dishwasher Upper Rack Adjuster Kit",
        "description": "Adjuster kit that raises and lowers the upper dishrack",
        "category": "Dishwasher",
        "brand": "Whirlpool",
        "manufacturer_part_number": "W10712394",
        "product_type": "Rack Adjuster",
        "compatible_models": ["WDT780SAEM1", "WDT750SAHZ0", "KDTE334GPS0"],
        "replacement_parts": ["W10712394", "AP5957560"],
        "symptoms": ["Door won't close", "Upper rack falls"],
        "installation": "Pull the upper rack out, remove the track stops, slide the rack off the rails and clip the new adjusters onto each side.",
        "troubleshooting": "An upper rack that drops on one side usually has a broken adjuster arm or missing positioner.",
        "price": "$32.10",
        "in_stock": True,
        "url": "https://www.partselect.com/PS11746591-Whirlpool-W10712394-Dishwasher-Upper-Rack-Adjuster-Kit.htm",
    },
    {
        "part_number": "PS11701542",
        "name": "Refrigerator Ice Maker Assembly",
        "description": "Replacement ice maker assembly with harness for side-by-side refrigerators",
        "category": "Refrigerator",
        "brand": "Whirlpool",
        "manufacturer_part_number": "W10884390",
        "product_type": "Ice Maker",
        "compatible_models": ["WRS325SDHZ", "WRX735SDHZ"],
        "replacement_parts": ["W10884390", "AP6029405"],
        "symptoms": ["Ice maker not working", "Ice maker not making ice", "Leaking"],
        "installation": "Unplug the refrigerator, remove the ice bin, unscrew the mounting screws, disconnect the harness and mount the new assembly.",
        "troubleshooting": "If the ice maker is not working, confirm the water supply valve is open, the feeler arm is down and the freezer is below 10F.",
        "price": "$119.95",
        "in_stock": True,
        "url": "https://www.partselect.com/PS11701542-Whirlpool-W10884390-Ice-Maker-Assembly.htm",
    },
    {
        "part_number": "PS12364199",
        "name": "Dishwasher Lower Spray Arm",
        "description": "Lower wash arm that sprays water onto dishes in the bottom rack",
        "category": "Dishwasher",
        "brand": "Frigidaire",
        "manufacturer_part_number": "5304517203",
        "product_type": "Spray Arm",
        "compatible_models": ["FFBD2412SS0A", "FGID2466QF2A"],
        "replacement_parts": ["5304517203", "AP6048283"],
        "symptoms": ["Not cleaning dishes properly", "Noisy"],
        "installation": "Remove the lower rack, unscrew the spray arm retaining nut counterclockwise and press the new arm onto the hub.",
        "troubleshooting": "Clogged spray arm holes cause poor cleaning; rinse the arm and clear the holes with a toothpick.",
        "price": "$38.60",
        "in_stock": False,
        "url": "https://www.partselect.com/PS12364199-Frigidaire-5304517203-Lower-Spray-Arm.htm",
    },
    {
        "part_number": "PS10065979",
        "name": "Dishwasher Drain Pump",
        "description": "Drain pump that removes water from the dishwasher tub at the end of each cycle",
        "category": "Dishwasher",
        "brand": "GE",
        "manufacturer_part_number": "WD26X10051",
        "product_type": "Pump",
        "compatible_models": ["GDF530PSM6SS", "GDT655SSJ2SS"],
        "replacement_parts": ["WD26X10051", "AP5985157"],
        "symptoms": ["Will not drain", "Leaking", "Noisy"],
        "installation": "Disconnect power, remove the kickplate, release the pump from the sump by turning it clockwise and install the new pump.",
        "troubleshooting": "A dishwasher that will not drain or makes a humming noise often has a failed or blocked drain pump.",
        "price": "$64.35",
        "in_stock": True,
        "url": "https://www.partselect.com/PS10065979-GE-WD26X10051-Drain-Pump.htm",
    },
    {
        "part_number": "PS2358880",
        "name": "Refrigerator Water Inlet Valve",
        "description": "Water valve that supplies the ice maker and dispenser",
        "category": "Refrigerator",
        "brand": "Samsung",
        "manufacturer_part_number": "DA62-00914B",
        "product_type": "Valve",
        "compatible_models": ["RF28HMEDBSR", "RS25J500DSR"],
        "replacement_parts": ["DA62-00914B", "AP4338426"],
        "symptoms": ["Ice maker not making ice", "Leaking", "Water dispenser not working"],
        "installation": "Shut off the water supply, remove the rear access panel, disconnect the lines and mount the new valve.",
        "troubleshooting": "A leaking refrigerator or an ice maker not working can be caused by a cracked or stuck inlet valve.",
        "price": "$71.20",
        "in_stock": True,
        "url": "https://www.partselect.com/PS2358880-Samsung-DA62-00914B-Water-Inlet-Valve.htm",
    },
]


class DataLoader:
    """Handles loading product catalog data"""

    @staticmethod
    def get_sample_products() -> List[ProductRecord]:
        """Returns a small built-in catalog of replacement parts"""
        return [ProductRecord.from_dict(data) for data in SAMPLE_PRODUCT_DATA]

    @staticmethod
    def load_products_from_json(path: Union[str, Path]) -> List[ProductRecord]:
        """Load products from a JSON list or a {"products": [...]} document"""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as file:
                data = json.load(file)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read product file {path}: {str(e)}") from e

        if isinstance(data, dict):
            data = data.get("products", [])

        products = []
        for raw in data:
            try:
                products.append(ProductRecord.from_dict(raw))
            except KeyError as e:
                logger.warning(f"Skipping product without required field {e}: {raw}")
            except ValueError as e:
                logger.warning(f"Skipping product with invalid value ({str(e)}): {raw}")

        logger.info(f"Loaded {len(products)} products from {path}")
        return products

    @staticmethod
    def populate(
        repository,
        vector_service=None,
        products: Optional[List[ProductRecord]] = None,
    ) -> int:
        """Write products to the catalog and, when given, the vector store"""
        if products is None:
            products = DataLoader.get_sample_products()

        repository.add_many(products)
        if vector_service is not None:
            vector_service.add_products(products)

        logger.info(f"Populated catalog with {len(products)} products")
        return len(products)
