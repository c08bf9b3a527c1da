"""Experiment runners: CLI, parameter sweeps and plots"""
