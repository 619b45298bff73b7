# Copyright 2016-2026, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import asyncio
import unittest

from stratus import Output, TransformError, deferred_output
from stratus._output import _OutputToStringError

from .helpers import MyResource, stratus_test


class OutputSecretTests(unittest.TestCase):
    @stratus_test
    async def test_secret(self):
        x = Output.secret("foo")
        is_secret = await x.is_secret()
        self.assertTrue(is_secret)

    @stratus_test
    async def test_unsecret(self):
        x = Output.secret("foo")
        y = Output.unsecret(x)
        self.assertEqual(await y.future(), "foo")
        self.assertFalse(await y.is_secret())

    @stratus_test
    async def test_apply_keeps_secret(self):
        x = Output.secret("foo").apply(lambda v: v.upper())
        self.assertEqual(await x.future(), "FOO")
        self.assertTrue(await x.is_secret())

    @stratus_test
    async def test_apply_returning_secret_output(self):
        x = Output.from_input("foo").apply(lambda v: Output.secret(v + "bar"))
        self.assertEqual(await x.future(), "foobar")
        self.assertTrue(await x.is_secret())

    @stratus_test
    async def test_all_any_secret_is_secret(self):
        x = Output.all(Output.from_input(1), Output.secret(2))
        self.assertEqual(await x.future(), [1, 2])
        self.assertTrue(await x.is_secret())

    @stratus_test
    async def test_format_and_concat_propagate_secret(self):
        password = Output.secret("hunter2")
        formatted = Output.format("user={0};password={1}", "admin", password)
        concatenated = Output.concat("p=", password)
        self.assertEqual(await formatted.future(), "user=admin;password=hunter2")
        self.assertTrue(await formatted.is_secret())
        self.assertEqual(await concatenated.future(), "p=hunter2")
        self.assertTrue(await concatenated.is_secret())


class OutputFromInputTests(unittest.TestCase):
    @stratus_test
    async def test_unwrap_empty_dict(self):
        x = Output.from_input({})
        self.assertEqual(await x.future(), {})

    @stratus_test
    async def test_unwrap_dict_output_key(self):
        x = Output.from_input({Output.from_input("hello"): Output.from_input("world")})
        self.assertEqual(await x.future(), {"hello": "world"})

    @stratus_test
    async def test_unwrap_dict_secret(self):
        x = Output.from_input({"hello": Output.secret("world")})
        self.assertEqual(await x.future(), {"hello": "world"})
        self.assertTrue(await x.is_secret())

    @stratus_test
    async def test_unwrap_list_dict(self):
        x = Output.from_input(["hello", {"foo": Output.from_input("bar")}])
        self.assertEqual(await x.future(), ["hello", {"foo": "bar"}])

    @stratus_test
    async def test_unwrap_awaitable(self):
        async def compute():
            return ["a", Output.from_input("b")]

        x = Output.from_input(compute())
        self.assertEqual(await x.future(), ["a", "b"])


class OutputApplyTests(unittest.TestCase):
    @stratus_test
    async def test_apply_flattens_output(self):
        x = Output.from_input(2).apply(lambda v: Output.from_input(v * 21))
        self.assertEqual(await x.future(), 42)

    @stratus_test
    async def test_apply_awaits_coroutine(self):
        async def double(v):
            await asyncio.sleep(0)
            return v * 2

        x = Output.from_input(21).apply(double)
        self.assertEqual(await x.future(), 42)

    @stratus_test
    async def test_apply_failure_is_transform_error(self):
        def boom(v):
            raise ValueError("bad value " + v)

        # Declaring the transformation never raises; awaiting it does.
        x = Output.from_input("x").apply(boom)
        with self.assertRaises(TransformError) as ctx:
            await x.future()
        self.assertIsInstance(ctx.exception.cause, ValueError)
        self.assertEqual(str(ctx.exception.cause), "bad value x")

    @stratus_test
    async def test_failed_source_is_not_transformed(self):
        calls = []

        def boom(v):
            raise ValueError("first")

        failed = Output.from_input(1).apply(boom)
        y = failed.apply(lambda v: calls.append(v))
        with self.assertRaises(TransformError) as ctx:
            await y.future()
        self.assertEqual(str(ctx.exception.cause), "first")
        self.assertEqual(calls, [])

    @stratus_test
    async def test_all_failure_skips_function(self):
        calls = []
        fut = asyncio.get_running_loop().create_future()
        fut.set_exception(RuntimeError("upstream"))
        combined = Output.all(Output.from_input("ok"), Output.from_input(fut)).apply(
            lambda vs: calls.append(vs)
        )
        with self.assertRaises(RuntimeError):
            await combined.future()
        self.assertEqual(calls, [])

    @stratus_test
    async def test_transform_runs_once(self):
        calls = []

        def record(v):
            calls.append(v)
            return v + 1

        x = Output.from_input(1).apply(record)
        y = x.apply(lambda v: v * 10)
        z = x.apply(lambda v: v * 100)
        self.assertEqual(await y.future(), 20)
        self.assertEqual(await z.future(), 200)
        self.assertEqual(await x.future(), 2)
        self.assertEqual(calls, [1])

    @stratus_test
    async def test_getattr_and_getitem(self):
        class Thing:
            size = 3

        self.assertEqual(await Output.from_input(Thing()).size.future(), 3)
        self.assertEqual(await Output.from_input({"a": 1})["a"].future(), 1)

    @stratus_test
    async def test_dunder_lookup_is_not_lifted(self):
        x = Output.from_input(1)
        self.assertFalse(hasattr(x, "__fspath__"))

    @stratus_test
    async def test_not_iterable(self):
        x = Output.from_input([1, 2])
        with self.assertRaises(TypeError):
            for _ in x:  # type: ignore
                pass

    @stratus_test
    async def test_str_raises(self):
        x = Output.secret("hunter2")
        with self.assertRaises(_OutputToStringError):
            str(x)
        with self.assertRaises(_OutputToStringError):
            f"{x}"  # pylint: disable=pointless-statement
        self.assertNotIn("hunter2", repr(x))

    @stratus_test
    async def test_all_rejects_mixed_arguments(self):
        with self.assertRaises(ValueError):
            Output.all("a", b="b")

    @stratus_test
    async def test_all_kwargs(self):
        x = Output.all(a=Output.from_input(1), b=2)
        self.assertEqual(await x.future(), {"a": 1, "b": 2})

    @stratus_test
    async def test_format_kwargs(self):
        x = Output.format("{greeting}, {name}!", greeting="hello", name=Output.from_input("world"))
        self.assertEqual(await x.future(), "hello, world!")


class OutputJsonTests(unittest.TestCase):
    @stratus_test
    async def test_json_dumps_nested_outputs(self):
        x = Output.json_dumps({"a": Output.from_input([1, Output.secret(2)])}, sort_keys=True)
        self.assertEqual(await x.future(), '{"a": [1, 2]}')
        self.assertTrue(await x.is_secret())

    @stratus_test
    async def test_json_loads(self):
        x = Output.json_loads(Output.from_input('{"a": [1, 2]}'))
        self.assertEqual(await x.future(), {"a": [1, 2]})

    @stratus_test
    async def test_json_loads_invalid_is_transform_error(self):
        x = Output.json_loads("{not json")
        with self.assertRaises(TransformError):
            await x.future()


class OutputResourcesTests(unittest.TestCase):
    @stratus_test
    async def test_resources_known_without_resolving(self):
        a = MyResource("a")
        b = MyResource("b")
        derived = Output.all(a.get_output("x"), b.get_output("y").apply(lambda v: v)).apply(str)
        self.assertEqual(derived.resources(), {a, b})
        self.assertEqual(Output.from_input("plain").resources(), set())

    @stratus_test
    async def test_same_output_for_same_name(self):
        a = MyResource("a")
        self.assertIs(a.get_output("x"), a.get_output("x"))

    @stratus_test
    async def test_resource_outputs_resolve_once(self):
        a = MyResource("a")
        x = a.get_output("x")
        a._resolve({"x": 1, "s": "p"}, ["s"])
        self.assertEqual(await x.future(), 1)
        self.assertTrue(await a.get_output("s").is_secret())
        self.assertIsNone(await a.get_output("missing").future())
        with self.assertRaises(RuntimeError):
            a._resolve({"x": 2})
        self.assertEqual(await x.future(), 1)

    @stratus_test
    async def test_apply_records_returned_output_as_source(self):
        a = MyResource("a")
        b = MyResource("b")
        derived = a.get_output("x").apply(lambda _: b.get_output("y"))
        self.assertEqual(derived.resources(), {a})

        a._resolve({"x": 1})
        b._resolve({"y": "from b"})
        self.assertEqual(await derived.future(), "from b")
        self.assertEqual(derived.resources(), {a, b})

    def test_outputs_need_a_running_loop(self):
        a = MyResource("a")
        with self.assertRaises(RuntimeError):
            a.get_output("x")
        with self.assertRaises(RuntimeError):
            deferred_output()


class DeferredOutputTests(unittest.TestCase):
    @stratus_test
    async def test_resolve(self):
        a = MyResource("a")
        out, resolve = deferred_output()
        derived = out.apply(lambda v: v + "!")
        resolve(a.get_output("x"))
        self.assertEqual(derived.resources(), {a})
        a._resolve({"x": "hi"})
        self.assertEqual(await derived.future(), "hi!")

    @stratus_test
    async def test_resolve_twice_fails(self):
        out, resolve = deferred_output()
        resolve(1)
        with self.assertRaises(RuntimeError):
            resolve(2)
        self.assertEqual(await out.future(), 1)

    @stratus_test
    async def test_forwards_failure(self):
        out, resolve = deferred_output()
        resolve(Output.from_input(1).apply(lambda v: v / 0))
        with self.assertRaises(TransformError):
            await out.future()
