"""
TrainingMirror Core

Domain models, configuration and analysis services.
"""
