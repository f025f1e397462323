"""SFWP scaffolder -- generates widget and trait files from stubs.

Submodules are imported directly (``sfwp.scaffolder.generator``,
``sfwp.scaffolder.naming``, ...); the patcher depends on ``naming`` while the
generator depends on the patcher's fragments, so this package re-exports
nothing.

Quick usage::

    from sfwp.config import Config
    from sfwp.scaffolder.generator import WidgetGenerator, WidgetOptions

    generator = WidgetGenerator(Config(root=Path("my-plugin")))
    generator.create_widget(WidgetOptions(name="Card Box", traits=["Card"]))
"""
