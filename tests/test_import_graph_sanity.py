import pytest

pytestmark = pytest.mark.repo_local

import release_fixtures  # noqa: F401


def test_import_graph_sanity() -> None:
    # These should import without any circular dependency errors.
    import relcheck.core.values  # noqa: F401
    import relcheck.manifest  # noqa: F401
    import gate.logic.release_checks.registry  # noqa: F401
    import gate.release_verify  # noqa: F401
    import relcheck.cli  # noqa: F401
