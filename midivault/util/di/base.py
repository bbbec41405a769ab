from dishka import Provider as DishkaProvider

from midivault.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all midivault providers. Factories default to the APP scope."""

    scope = Scope.APP
