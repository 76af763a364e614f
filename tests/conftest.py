import pytest


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # execute all other hooks to obtain the report object
    outcome = yield
    rep = outcome.get_result()

    # we only look at actual failing test calls, not setup/teardown
    if rep.when == "call" and rep.failed:
        output = getattr(getattr(item.obj, '__self__', None), 'output', None)
        if output is not None and hasattr(output, 'getvalue'):
            rep.sections.append(('mapwatch output', output.getvalue()))
