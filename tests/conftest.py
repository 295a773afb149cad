"""Shared reference-data fixtures written to temporary CSV files."""

from __future__ import annotations

from pathlib import Path

import pytest

from hotelcost.config import Settings
from hotelcost.factory import create_default_service
from hotelcost.service import HotelCostService

COST_TABLE_CSV = """\
Brand,Rooms,Floors, Total Building GSF ,KS,QQ,K1,ADA,01_General_Requirements,03_Concrete,07_Thermal_Moisture,14_Conveying_Equipment,22_Plumbing,Charges_Fees
Home2,80,4,"38,000",20,40,16,4,"$300,000","$320,000","$150,000","$180,000",$90000,
Home2,100,4,"45,000",30,50,15,5,"$350,000","$400,000","$200,000","$210,000","$120,000","$50,000"
Home2,150,4,"62,000",45,75,22,8,"$450,000","$520,000","$260,000","$250,000","$160,000","$70,000"
Home2,100,6,"47,000",30,50,15,5,"$360,000","$410,000","$205,000","$260,000","$125,000",
Tru,98,4,"50,200",0,46,47,5,"$1,046,000","$338,000","$196,000",n/a,"$0",
Hampton,90,4,"54,100",18,54,13,5,"$1,152,000","$372,000","$214,000","$268,000","$322,000",
"""

ASSEMBLIES_CSV = """\
Test Assembly Library,,,,
Second preamble line,,,,
,,,,
Revision,,,,
Assembly,Description,Input Basis,Input,% Price
03_Concrete,Concrete,,,100%
Slab on Grade,4in slab on grade,% GSF,25%,40%
Foundations,Spread footings,% GSF,25%,35%
Elevated Topping Slabs,Gypcrete at upper floors,% Floors,100%,18%
Equipment Pads,Housekeeping pads,Constant,6,7%
07_Protection,Thermal and Moisture Protection,,,100%
Roofing,TPO roof,% GSF,25%,60%
Sealants,Joint sealants,% GSF,100%,40%
14_Conveying_Equipment,Conveying Equipment,,,100%
Elevators,Hydraulic passenger elevator,Constrant,2,92%
Laundry Chutes,Linen chute,% Floors,100%,8%
11_Equipment,Equipment,,,100%
Guest Laundry,Guest laundry machines,Constant,4,100%
Plumbing,Plumbing,,,
Water Closets,Guest bath water closets,% of Units,100%,60%
Piping,Domestic water piping,% GSF,100%,30%
Owner Allowance,TBD,Lump Sum,TBD,10%
"""

CITIES_CSV = """\
id,name,state,cost_factor,lat,lng
tst-tx,Testville,TX,1.10,30.2672,-97.7431
bal-md,Baltimore,MD,0.95,39.2904,-76.6122
sea-wa,Seattle,WA,1.15,47.6062,-122.3321
hnl-hi,Honolulu,HI,1.28,,
bad-xx,Nowhere,XX,-2,10.0,10.0
"""


@pytest.fixture()
def cost_table_path(tmp_path: Path) -> Path:
    path = tmp_path / "hilton_cost.csv"
    path.write_text(COST_TABLE_CSV, encoding="utf-8")
    return path


@pytest.fixture()
def assemblies_path(tmp_path: Path) -> Path:
    path = tmp_path / "hilton_assemblies.csv"
    path.write_text(ASSEMBLIES_CSV, encoding="utf-8")
    return path


@pytest.fixture()
def cities_path(tmp_path: Path) -> Path:
    path = tmp_path / "cities.csv"
    path.write_text(CITIES_CSV, encoding="utf-8")
    return path


@pytest.fixture()
def settings(cost_table_path: Path, assemblies_path: Path, cities_path: Path) -> Settings:
    """Settings pointing at the temporary CSVs, with no remote store."""
    return Settings(
        cost_table_path=cost_table_path,
        assemblies_path=assemblies_path,
        cities_path=cities_path,
    )


@pytest.fixture()
def service(settings: Settings) -> HotelCostService:
    """Service wired to the temporary CSVs (not yet initialized)."""
    return create_default_service(settings)
