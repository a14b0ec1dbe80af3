"""CancerScan: image upload, binary cancer classification and Firestore logging."""

__version__ = "0.1.0"
