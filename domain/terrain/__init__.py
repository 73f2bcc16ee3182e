"""Terrain Bounded Context.

Responsible for DTED metadata and elevation queries:
- Value Objects: UserHeaderLabel, DataSetIdentification, AccuracyDescription,
  LatitudeLongitude, Shape, DataBlock, GeoData
- Services: is_within_coverage, nearest_elevation, sample_transform
"""
