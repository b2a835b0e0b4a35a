"""
electroforge test suite
=======================

Test Modules
------------
- test_models.py: Pydantic models and answers files
- test_presets.py: feature and script registries
- test_resolver.py: implied-feature closure
- test_fileops.py: template tree copying
- test_render.py: token substitution
- test_patches.py: source patches
- test_process.py: package manager and git invocation
- test_generator.py: the composition pipeline, end to end
- test_cli.py: command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_generator.py

    # Run specific test class
    pytest tests/test_generator.py::TestFailures
"""
