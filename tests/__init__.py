"""
armakit Test Suite

Tests for the ARMA process model, its frequency-domain engines, the impulse
response and simulation kernels, and the shared core infrastructure.
"""
