"""ARTEMIS - AI Real-Time Event Monitoring & Intelligence System."""

__version__ = "0.1.0"
