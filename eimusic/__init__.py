"""EiMusic admin console."""
