"""GQLSUITE test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Discovery over real directory trees and the real container backend.
- e2e/          : The ``gqlsuite`` command driven through Click's CliRunner.
- fixtures/     : Pytest plugin modules (suite tree builders, Docker gating).

General guidance
- Keep unit fast and deterministic; prefer fakes over mocks at boundaries.
- Integration builds suite trees under tmp_path; Docker tests carry @pytest.mark.docker.
- E2E asserts user-observable output and exit codes, not internals.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
