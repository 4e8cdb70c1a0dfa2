"""Configuration constants for the fret placement calculator."""

# =============================================================================
# Request Defaults
# =============================================================================

# Used when the tuning system selector is empty
DEFAULT_TUNING_SYSTEM = "ptolemy"

# Equal temperament divisions of the octave (31-TET approximates
# quarter-comma meantone closely)
DEFAULT_EQUAL_DIVISIONS = 31

# Octaves computed for systems that can span more than one
DEFAULT_OCTAVES = 1

# Largest accepted values; anything above falls back to the default
MAX_EQUAL_DIVISIONS = 1200
MAX_OCTAVES = 8

# Diatonic mode for Ptolemy's intense diatonic
DEFAULT_DIATONIC_MODE = "Ionian"

# Which competing major second / minor seventh survives in N-limit scales
DEFAULT_JUST_SYMMETRY = "asymmetric"

# Prime limit for the generic just intonation system
DEFAULT_JUST_LIMIT = 5

# =============================================================================
# Rendering
# =============================================================================

# Decimal places used when rounding fret positions
JUST_POSITION_PRECISION = 2
EQUAL_POSITION_PRECISION = 2
MEANTONE_POSITION_PRECISION = 1
WELL_TEMPERED_POSITION_PRECISION = 3

# =============================================================================
# Temperament
# =============================================================================

# Fraction of the syntonic comma each meantone fifth is narrowed by
MEANTONE_COMMA_FRACTION = 0.25

# Fifths either side of the tonic
MEANTONE_FIFTHS = 6
EXTENDED_MEANTONE_FIFTHS = 9

# =============================================================================
# OSC Configuration
# =============================================================================

OSC_HOST = "127.0.0.1"

# Port the responder listens on for requests
OSC_LISTEN_PORT = 9010

# Port replies are sent to on the requesting host
OSC_REPLY_PORT = 9011

# OSC address patterns
OSC_REQUEST = "/fretboard/request"
OSC_RESPONSE = "/fretboard/response"

# Status codes carried in replies
STATUS_OK = 200
STATUS_UNPROCESSABLE = 422
