"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No network or Docker; fixture files go under tmp_path only.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
