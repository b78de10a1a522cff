"""
Program layer: operations, collaborators, settings and oracle authorization
"""

from .collaborators import (
    FixedClock,
    InMemoryMetadataRegistry,
    SimulatedAmm,
    SimulatedSwapVenue,
)
from .config import ProgramSettings, load_settings
from .program import Event, EventKind, LaunchpadProgram
from .signatures import (
    BlsVerifier,
    Ed25519Verifier,
    InstructionContext,
    ProgramCall,
    SignatureCheck,
    Verifier,
    dividend_message,
    points_message,
)

__all__ = [
    "FixedClock",
    "InMemoryMetadataRegistry",
    "SimulatedAmm",
    "SimulatedSwapVenue",
    "ProgramSettings",
    "load_settings",
    "Event",
    "EventKind",
    "LaunchpadProgram",
    "BlsVerifier",
    "Ed25519Verifier",
    "InstructionContext",
    "ProgramCall",
    "SignatureCheck",
    "Verifier",
    "dividend_message",
    "points_message",
]
