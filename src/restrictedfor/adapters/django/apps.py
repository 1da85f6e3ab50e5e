from django.apps import AppConfig


class RestrictedForConfig(AppConfig):
    name = "restrictedfor.adapters.django"
    label = "restricted_for"
    verbose_name = "restricted-for template tag"
