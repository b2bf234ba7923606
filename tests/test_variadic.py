import unittest

from lazywire import AUTOWIRE, Container, ReflectionAutowire


class Color: ...


class TestVariadicConstructorInjection(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.color = Color()
        self.cont = Container(
            {
                AUTOWIRE: lambda c: ReflectionAutowire(c),
                "Color": lambda _: self.color,
            }
        )

    def test_autowire_ignores_inherited_variadic_args_and_kwargs(self):
        class Base:
            def __init__(self, color: Color, *args, **kwargs):
                self.color = color
                self.args = args
                self.kwargs = kwargs

        class Derived(Base):
            ...
            # No explicit __init__; inherits Base.__init__ with *args/**kwargs

        child = self.cont.autowire(Derived)
        assert isinstance(child, Derived)
        assert child.color is self.color
        assert child.args == ()
        assert child.kwargs == {}

    def test_autowire_forwards_extra_arguments_through_variadic_parameters(self):
        class Base:
            def __init__(self, **kwargs):
                self.kwargs = kwargs

        class Derived(Base):
            def __init__(self, name: str, color: Color, *args, **kwargs):
                super().__init__(**kwargs)
                self.name = name
                self.color = color
                self.args = args

        child = self.cont.autowire(Derived, "abc", Color(), 1, 2, a=5)

        assert isinstance(child, Derived)
        assert child.name == "abc"
        assert child.color is not self.color
        assert child.args == (1, 2)
        assert child.kwargs["a"] == 5
