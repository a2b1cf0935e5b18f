"""
Test Suite for the Docblock Query Parameter Extractor
======================================================

Test Structure:
    - test_type_inference.py: Type/format inference rules
    - test_signature_introspector.py: Signature classification rules
    - test_annotation_parser.py: Directive grammar
    - test_schema_synthesizer.py: Merge and precedence
    - test_extractor.py: End-to-end pipeline, sources and emission
    - test_cache_manager.py: Memoization
    - test_config.py: Configuration loading
"""
