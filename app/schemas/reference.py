from typing import Dict, List

from app.schemas.common import CamelModel


class ReferenceData(CamelModel):
    processes: List[str]
    models: List[str]
    times: List[str]
    stations_by_process: Dict[str, List[str]]
    instruction_types: List[str]
