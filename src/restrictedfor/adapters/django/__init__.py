"""Django integration.

Add ``"restrictedfor.adapters.django"`` to ``INSTALLED_APPS`` and use::

    {% load restricted_for %}
    {% restricted_for include-roles="staff" exclude-roles="suspended" %}...{% endrestricted_for %}
"""
