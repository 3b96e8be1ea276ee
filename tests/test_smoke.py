def test_bundler_imports():
    """Verify all bundler submodules can be imported without errors."""
    import bundler.cli
    import bundler.core.config
    import bundler.core.logging
    import bundler.descriptor
    import bundler.model
    import bundler.packaging

    assert bundler.cli.main is not None
