"""SFWP reporter -- widget documentation metadata."""

from sfwp.reporter.docs import DocBlock, DocsGenerator, compose_doc_block

__all__ = ["DocBlock", "DocsGenerator", "compose_doc_block"]
