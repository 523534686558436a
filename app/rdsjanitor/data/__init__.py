"""Bundled data files for rdsjanitor."""
