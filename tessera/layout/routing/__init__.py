"""Supply routing on top of pre-computed router tracks."""
