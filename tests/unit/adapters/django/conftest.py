import pytest

try:
    import django
except ImportError:  # pragma: no cover
    collect_ignore_glob = ["test_*.py"]
else:
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=["restrictedfor.adapters.django"],
            TEMPLATES=[{"BACKEND": "django.template.backends.django.DjangoTemplates"}],
            USE_TZ=True,
        )
        django.setup()


@pytest.fixture(autouse=True)
def _fresh_decider():
    from restrictedfor.adapters.django.factory import get_decider

    get_decider.cache_clear()
    yield
    get_decider.cache_clear()
