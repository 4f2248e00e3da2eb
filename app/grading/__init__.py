"""Rubric model, rubric scoring, gradebook analytics and export."""
