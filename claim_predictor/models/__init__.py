"""Prediction input and output data models."""
