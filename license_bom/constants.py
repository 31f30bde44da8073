"""Constants for license-bom."""

# Exit codes
EXIT_SUCCESS = 0  # Every project attributed
EXIT_ISSUES = 1  # Some projects need attention
EXIT_ERROR = 2  # Run aborted by a fatal error

# Error message for packages whose license files matched no template
NO_LICENSE_DETECTED = "No license detected"

# Number of decimal digits kept in reported confidences
CONFIDENCE_DIGITS = 3

# Confidence assigned to manually overridden licenses
OVERRIDE_CONFIDENCE = 1.0

# Path segments after which an import path is considered vendored
VENDOR_MARKERS = ("/vendor/", "/_vendor/")

# Legal disclaimer
LEGAL_DISCLAIMER = (
    "This tool matches license files against known templates for "
    "informational purposes only. It does not constitute legal advice. "
    "Consult a qualified attorney for legal guidance on license compliance."
)

# Short disclaimer for terminal display
LEGAL_DISCLAIMER_SHORT = (
    "License attribution is based on textual similarity only. "
    "It does not constitute legal advice."
)
