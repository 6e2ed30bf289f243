"""
Feature definitions shared by the unit tests.

Usage:
    from resources.tests.helpers.features import SMALL_FEATURES
    graph = FeatureGraph()
    graph.loads(SMALL_FEATURES)
"""

SMALL_FEATURES = """\
# A trimmed-down geometry for tests
ROOT\tnode\tsonorant Laryngeal Place
sonorant\tprivative
Laryngeal\tnode\tvoice
voice\tprivative
Place\tnode\tlabial Coronal
labial\tprivative
Coronal\tnode\tanterior distributed
anterior\tbinary
distributed\tbinary
aperture\tscalar
BOUNDARY\tprivative
"""
