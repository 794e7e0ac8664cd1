"""Fixed shop-floor reference data: processes, stations, models, shift times."""

from typing import Dict, List

ALL_PROCESSES = "All Processes"
ALL_STATIONS = "All Stations"

PROCESSES: List[str] = [
    "Welding Jig",
    "Welding Bracket",
    "Mul.Drilling",
    "Buffing",
    "Chromatic In",
    "Chromatic Out",
    "Painting",
    "Balancing",
    "QAQC",
]

MODELS: List[str] = [
    "NTSU",
    "NTRB",
    "NTSN",
    "NTSM",
    "NTSW",
    "NTSX",
    "NTSY",
    "NTST",
    "NTSZ",
    "NTSJ",
]

TIMES: List[str] = [
    "9.45am",
    "11.30am",
    "2.45pm",
    "5pm",
    "8pm",
    "8am",
]

# Chronological order of the shift checkpoints, used for reporting.
SHIFT_ORDER: List[str] = ["8am", "9.45am", "11.30am", "2.45pm", "5pm", "8pm"]

DRILLING_PROCESS = "Mul.Drilling"
REGULAR_STATIONS: List[str] = ["1", "2", "3", "4", "5", "6", "7"]
DRILLING_STATIONS: List[str] = ["F", "G", "H"]

STATIONS_BY_PROCESS: Dict[str, List[str]] = {
    DRILLING_PROCESS: DRILLING_STATIONS,
    "default": REGULAR_STATIONS,
}

INSTRUCTION_TYPES: List[str] = [
    "Increase output",
    "Quality check",
    "Slow down production",
    "Maintenance required",
    "Custom message",
]


def stations_for(process: str) -> List[str]:
    """Valid stations for a process; "All Processes" accepts every known station."""
    if process == ALL_PROCESSES:
        return REGULAR_STATIONS + DRILLING_STATIONS
    return STATIONS_BY_PROCESS.get(process, STATIONS_BY_PROCESS["default"])


def reference_data() -> dict:
    return {
        "processes": list(PROCESSES),
        "models": list(MODELS),
        "times": list(TIMES),
        "stations_by_process": {k: list(v) for k, v in STATIONS_BY_PROCESS.items()},
        "instruction_types": list(INSTRUCTION_TYPES),
    }
