"""Static catalog of the laundry packages offered in the app"""
from laundry_service.models.schemas import ServicePackage
from typing import List, Optional

SERVICE_PACKAGES: List[ServicePackage] = [
    ServicePackage(key="half-kg", title="Wash, Dry & Fold", weight="1/2 kg", price="SLe 25.00"),
    ServicePackage(key="one-kg", title="Wash, Dry & Fold", weight="1 kg", price="SLe 30.00"),
    ServicePackage(key="half-kg-iron", title="Wash, Dry, Iron & Fold", weight="1/2 kg", price="SLe 45.00"),
    ServicePackage(key="one-kg-iron", title="Wash, Dry, Iron & Fold", weight="1 kg", price="SLe 50.00"),
    ServicePackage(key="half-kg-premium", title="Wash, Dry, Iron & Package", weight="1/2 kg", price="SLe 50.00"),
    ServicePackage(key="one-kg-premium", title="Wash, Dry, Iron & Package", weight="1 kg", price="SLe 55.00"),
    ServicePackage(key="stain-removal", title="Stain Removal", weight="Per Clothe", price="SLe 20.00"),
    ServicePackage(key="whites", title="Whites", weight="Per Clothe", price="SLe 10.00"),
    ServicePackage(key="emergency", title="Emergency Service", weight="Any Package", price="2x Package Price"),
]

_BY_KEY = {package.key: package for package in SERVICE_PACKAGES}


def list_packages() -> List[ServicePackage]:
    return list(SERVICE_PACKAGES)


def get_package(key: str) -> Optional[ServicePackage]:
    return _BY_KEY.get(key)
