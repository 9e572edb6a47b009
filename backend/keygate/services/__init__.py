"""Services Layer - startup wiring and the insert shell around the pipeline.

Invariants:
    - Pipeline assembled once at startup from explicit registration lists
    - Persistence reached only through the ExposureKeyRepository protocol
    - bootstrap.configure() is the one startup entry: logging, then pipeline
"""
