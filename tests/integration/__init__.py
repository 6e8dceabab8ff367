"""Integration tests.

Purpose
- Exercise real interactions with the filesystem and the Docker daemon.

Guidelines
- Build suite trees with the ``make_suite`` fixture; never rely on the working directory.
- Container tests are marked 'docker' and skipped when no daemon answers.
- Mark as 'integration' and keep them slower but reliable.
"""
