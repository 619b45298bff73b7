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
import json
from inspect import isawaitable
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Type,
    TypeVar,
    Union,
    cast,
    overload,
)

from ._output import _OutputToStringError
from .errors import TransformError

if TYPE_CHECKING:
    from .resource import Resource

T = TypeVar("T")
T1 = TypeVar("T1")
T2 = TypeVar("T2")
T3 = TypeVar("T3")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")

Input = Union[T, Awaitable[T], "Output[T]"]
Inputs = Mapping[str, Input[Any]]


class OutputData(Generic[T]):
    """
    This is an advanced type used to report back internal details of an Output.
    """

    value: T
    """
    The concrete value of the output.
    """
    secret: bool
    """
    Whether or not the output should be treated as containing secret data. Secret values are never
    rendered in diagnostics; they are only passed through to the resources and commands that consume them.
    """

    def __init__(self, value: T, secret: Optional[bool] = None) -> None:
        self.value = value
        self.secret = False if secret is None else secret


class Output(Generic[T_co]):
    """
    Output helps encode the relationship between Resources in a stratus program. Specifically an
    Output holds onto a piece of data that may not be known yet and the Resources it was derived from.
    An Output value can then be provided when constructing new Resources, allowing that new Resource
    to know both the value as well as the Resources the value came from. This allows for a precise
    'Resource dependency graph' to be created before anything is provisioned.

    An Output resolves exactly once. If the computation behind it fails, every Output derived from it
    fails with the same error and no further transformation runs.
    """

    _data: "asyncio.Future[OutputData[T_co]]"
    """
    The future internal data for this Output.
    """

    _direct_resources: Set["Resource"]
    """
    The resources this Output was produced by directly.
    """

    _sources: Tuple["Output[Any]", ...]
    """
    The Outputs this Output was derived from.
    """

    _deferred: bool
    """
    True while this Output was made by `deferred_output` and has not been given its value yet.
    """

    def __init__(
        self,
        data: Awaitable[OutputData[T_co]],
        resources: Optional[Iterable["Resource"]] = None,
        sources: Optional[Iterable["Output[Any]"]] = None,
    ) -> None:
        self._data = asyncio.ensure_future(data)
        self._direct_resources = set(resources or ())
        self._sources = tuple(sources or ())
        self._deferred = False

    # Private implementation details - do not document.
    def _walk(self) -> Iterator["Output[Any]"]:
        seen: Set[int] = set()
        pending: List[Output[Any]] = [self]
        while pending:
            o = pending.pop()
            if id(o) in seen:
                continue
            seen.add(id(o))
            yield o
            pending.extend(o._sources)

    def resources(self) -> Set["Resource"]:
        """
        The resources this Output depends on, known without waiting for the value.
        """
        result: Set["Resource"] = set()
        for o in self._walk():
            result |= o._direct_resources
        return result

    async def future(self) -> T_co:
        data = await self._data
        return data.value

    # End private implementation details.

    async def is_secret(self) -> bool:
        data = await self._data
        return data.secret

    def apply(self, func: Callable[[T_co], Input[U]]) -> "Output[U]":
        """
        Transforms the data of the output with the provided func. The result remains an
        Output so that dependent resources can be properly tracked.

        'func' is not allowed to make resources.

        'func' can return other Outputs. This can be handy if you have a Output<SomeVal>
        and you want to get a transitive dependency of it.

        'func' runs once, after this Output resolves. If it raises, the returned Output fails with a
        TransformError; it never raises to the caller of `apply`. If this Output failed, 'func' is not
        called at all.

        :param Callable[[T_co],Input[U]] func: A function that will, given this Output's value, transform the value to
               an Input of some kind, where an Input is either a prompt value, a Future, or another Output of the given
               type.
        :return: A transformed Output obtained from running the transformation function on this Output's value.
        :rtype: Output[U]
        """

        async def run() -> OutputData[U]:
            data = await self._data

            try:
                transformed = func(cast(T_co, data.value))
                if isawaitable(transformed) and not isinstance(transformed, Output):
                    transformed = await transformed
            except Exception as exn:
                raise TransformError(exn) from exn

            # Forward along the inner output's value and secretness. The inner output becomes a source
            # only now, so the resources it came from are visible to the scheduler's stall check.
            if isinstance(transformed, Output):
                result._sources = result._sources + (transformed,)
                transformed_data = await transformed._data
                return OutputData(
                    cast(U, transformed_data.value),
                    data.secret or transformed_data.secret,
                )

            return OutputData(cast(U, transformed), data.secret)

        result: Output[U] = Output(run(), sources=[self])
        return result

    def __getattr__(self, item: str) -> "Output[Any]":  # type: ignore
        """
        Syntax sugar for retrieving attributes off of outputs.

        :param str item: An attribute name.
        :return: An Output of this Output's underlying value's property with the given name.
        :rtype: Output[Any]
        """
        if item.startswith("__"):
            raise AttributeError(item)
        return self.apply(lambda v: getattr(v, item))  # type: ignore

    def __getitem__(self, key: Any) -> "Output[Any]":
        """
        Syntax sugar for looking up attributes dynamically off of outputs.

        :param Any key: Key for the attribute dictionary.
        :return: An Output of this Output's underlying value, keyed with the given key as if it were a dictionary.
        :rtype: Output[Any]
        """
        return self.apply(lambda v: v[key])  # type: ignore

    def __iter__(self) -> Any:
        """
        Output instances are not iterable, but since they implement __getitem__ we need to explicitly prevent
        iteration by implementing __iter__ to raise a TypeError.
        """
        raise TypeError(
            "'Output' object is not iterable, consider iterating the underlying value inside an 'apply'"
        )

    @staticmethod
    def from_input(val: Input[T_co]) -> "Output[T_co]":
        """
        Takes an Input value and produces an Output value from it, deeply unwrapping nested Input values through nested
        lists and dicts. Nested objects of other types (including Resources) are not deeply unwrapped.

        :param Input[T_co] val: An Input to be converted to an Output.
        :return: A deeply-unwrapped Output that is guaranteed to not contain any Input values.
        :rtype: Output[T_co]
        """

        # Is it an output already? Recurse into the value contained within it.
        if isinstance(val, Output):
            return val.apply(Output.from_input)

        # Is a (non-empty) dict or list? Recurse into the values within them.
        if val and isinstance(val, dict):
            # The keys themselves might be outputs, so we can't just pass `**val` to all.
            keys = list(val.keys())
            values = list(val.values())
            o_dict: Output[dict] = Output.all(Output.all(*keys), Output.all(*values)).apply(
                lambda kv: dict(zip(kv[0], kv[1]))
            )
            return cast(Output[T_co], o_dict)

        if val and isinstance(val, list):
            o_list: Output[list] = Output.all(*val)
            return cast(Output[T_co], o_list)

        # Is it awaitable? If so, schedule it for execution and use the resulting future
        # as the value future for a new output.
        if isawaitable(val):

            async def get_data(val: Awaitable[T]) -> OutputData[T]:
                o: Output[T] = Output.from_input(await val)
                return await o._data

            return Output(get_data(val))

        # It's a prompt value. It is known and not secret.
        return _resolved(cast(T_co, val))

    @staticmethod
    def _from_input_shallow(val: Input[T]) -> "Output[T]":
        """
        Like `from_input`, but does not recur deeply. Instead, checks if `val` is an `Output` value
        and returns it as is. Otherwise, promotes a known value or future to `Output`.
        """

        if isinstance(val, Output):
            return val

        if isawaitable(val):

            async def get_data(val: Awaitable[T]) -> OutputData[T]:
                return OutputData(await val)

            return Output(get_data(val))

        return _resolved(cast(T, val))

    @staticmethod
    def unsecret(val: "Output[T]") -> "Output[T]":
        """
        Takes an existing Output and returns a new Output with the same value that is not marked secret.

        :param Output[T] val: An Output to be converted to a non-Secret Output.
        :return: An Output that is not marked as a Secret.
        :rtype: Output[T]
        """

        async def get_data() -> OutputData[T]:
            data = await val._data
            return OutputData(data.value, False)

        return Output(get_data(), sources=[val])

    @staticmethod
    def secret(val: Input[T]) -> "Output[T]":
        """
        Takes an Input value and produces an Output value from it, deeply unwrapping nested Input values as necessary.
        It also marks the returned Output as a secret, so its contents are never rendered in diagnostics.

        :param Input[T] val: An Input to be converted to an Secret Output.
        :return: A deeply-unwrapped Output that is guaranteed to not contain any Input values and is marked as a Secret.
        :rtype: Output[T]
        """
        o = Output.from_input(val)

        async def get_data() -> OutputData[T]:
            data = await o._data
            return OutputData(data.value, True)

        return Output(get_data(), sources=[o])

    # According to mypy these overloads unsafely overlap, so we ignore the type check.
    @overload
    @staticmethod
    def all(*args: Input[T]) -> "Output[List[T]]":  # type: ignore
        ...

    @overload
    @staticmethod
    def all(**kwargs: Input[T]) -> "Output[Dict[str, T]]":
        ...

    @staticmethod
    def all(*args: Input[T], **kwargs: Input[T]):
        """
        Produces an Output of a list (if args i.e a list of inputs are supplied)
        or dict (if kwargs i.e. keyworded arguments are supplied).

        This function can be used to combine multiple, separate Inputs into a single
        Output which can then be used as the target of `apply`. Resource dependencies
        are preserved in the returned Output. The result resolves once every input has
        resolved; if any input fails, the result fails with that input's error.

        Examples::

            Output.all(foo, bar) -> Output[[foo, bar]]
            Output.all(foo=foo, bar=bar) -> Output[{"foo": foo, "bar": bar}]

        :param Input[T] args: A list of Inputs to convert.
        :param Input[T] kwargs: A list of named Inputs to convert.
        :return: An output of list or dict, converted from unnamed or named Inputs respectively.
        """

        async def gather_dict(outputs: Dict[str, Output[T]]) -> OutputData:
            data_list: List[OutputData[T]] = await asyncio.gather(
                *[o._data for o in outputs.values()]
            )
            secret = any(data.secret for data in data_list)
            value = {k: v.value for (k, v) in zip(outputs.keys(), data_list)}
            return OutputData(value, secret)

        async def gather_list(outputs: List[Output[T]]) -> OutputData:
            data_list: List[OutputData[T]] = await asyncio.gather(
                *[o._data for o in outputs]
            )
            secret = any(data.secret for data in data_list)
            return OutputData([data.value for data in data_list], secret)

        if args and kwargs:
            raise ValueError(
                "Output.all() was supplied a mix of named and unnamed inputs"
            )

        # First, map all inputs to outputs using `from_input`, then aggregate the list or dict of futures into
        # a future of list or dict.
        if kwargs:
            named = {k: Output.from_input(v) for k, v in kwargs.items()}
            return Output(gather_dict(named), sources=named.values())
        unnamed = [Output.from_input(x) for x in args]
        return Output(gather_list(unnamed), sources=unnamed)

    @staticmethod
    def concat(*args: Input[str]) -> "Output[str]":
        """
        Concatenates a collection of Input[str] into a single Output[str].

        This function takes a sequence of Input[str], stringifies each, and concatenates all values
        into one final string. This can be used like so:

            url = Output.concat("http://", server.hostname, ":", loadBalancer.port)

        :param Input[str] args: A list of string Inputs to concatenate.
        :return: A concatenated output string.
        :rtype: Output[str]
        """

        transformed_items: List[Output[str]] = [Output.from_input(v) for v in args]
        return Output.all(*transformed_items).apply("".join)  # type: ignore

    @staticmethod
    def format(
        format_string: Input[str], *args: Input[object], **kwargs: Input[object]
    ) -> "Output[str]":
        """
        Perform a string formatting operation.

        This has the same semantics as `str.format` except it handles Input types.

        :param Input[str] format_string: A formatting string
        :param Input[object] args: Positional arguments for the format string
        :param Input[object] kwargs: Keyword arguments for the format string
        :return: A formatted output string.
        :rtype: Output[str]
        """

        if args and kwargs:
            return _map3_output(
                Output.from_input(format_string),
                Output.all(*args),
                Output.all(**kwargs),
                lambda str, args, kwargs: str.format(*args, **kwargs),
            )
        if args:
            return _map2_output(
                Output.from_input(format_string),
                Output.all(*args),
                lambda str, args: str.format(*args),
            )
        if kwargs:
            return _map2_output(
                Output.from_input(format_string),
                Output.all(**kwargs),
                lambda str, kwargs: str.format(**kwargs),
            )
        return Output.from_input(format_string).apply(lambda str: str.format())

    @staticmethod
    def json_dumps(
        obj: Input[Any],
        *,
        skipkeys: bool = False,
        ensure_ascii: bool = True,
        allow_nan: bool = True,
        cls: Optional[Type[json.JSONEncoder]] = None,
        indent: Optional[Union[int, str]] = None,
        separators: Optional[Tuple[str, str]] = None,
        default: Optional[Callable[[Any], Any]] = None,
        sort_keys: bool = False,
    ) -> "Output[str]":
        """
        Uses json.dumps to serialize the given Input[object] value into a JSON string.

        The arguments have the same meaning as in `json.dumps` except obj is an Input. Nested Outputs are
        resolved before serializing.
        """

        def dumps(value: Any) -> str:
            return json.dumps(
                value,
                skipkeys=skipkeys,
                ensure_ascii=ensure_ascii,
                allow_nan=allow_nan,
                cls=cls,
                indent=indent,
                separators=separators,
                default=default,
                sort_keys=sort_keys,
            )

        return Output.from_input(obj).apply(dumps)

    @staticmethod
    def json_loads(
        s: Input[Union[str, bytes, bytearray]],
        *,
        cls: Optional[Type[json.JSONDecoder]] = None,
        object_hook: Optional[Callable[[Dict[Any, Any]], Any]] = None,
        parse_float: Optional[Callable[[str], Any]] = None,
        parse_int: Optional[Callable[[str], Any]] = None,
    ) -> "Output[Any]":
        """
        Uses json.loads to deserialize the given JSON Input[str] value into a value.

        The arguments have the same meaning as in `json.loads` except s is an Input.
        """

        def loads(s: Union[str, bytes, bytearray]) -> Any:
            return json.loads(
                s,
                cls=cls,
                object_hook=object_hook,
                parse_float=parse_float,
                parse_int=parse_int,
            )

        os: Output[Union[str, bytes, bytearray]] = Output.from_input(s)
        return os.apply(loads)

    def __str__(self) -> str:
        raise _OutputToStringError()


def deferred_output() -> Tuple[Output[T], Callable[[Input[T]], None]]:
    """
    Creates an Output whose value is supplied later, and the function that supplies it. This allows a
    resource to consume a value from a resource declared after it.

    The resolving function must be called before the run starts; an unresolved deferred Output is a
    construction error.
    """
    data_future: "asyncio.Future[OutputData[T]]" = asyncio.get_running_loop().create_future()
    output: Output[T] = Output(data_future)
    output._deferred = True

    def resolve(value: Input[T]) -> None:
        if not output._deferred:
            raise RuntimeError("deferred output has already been resolved")
        source = Output.from_input(value)
        output._sources = (source,)
        output._deferred = False

        async def forward() -> None:
            try:
                data_future.set_result(await source._data)
            except Exception as exn:  # noqa: BLE001 forwarded to the deferred output
                data_future.set_exception(exn)

        asyncio.ensure_future(forward())

    return output, resolve


def _resolved(value: T, secret: bool = False) -> Output[T]:
    """Builds an Output that is already resolved to `value`."""

    data_future: "asyncio.Future[OutputData[T]]" = asyncio.get_running_loop().create_future()
    data_future.set_result(OutputData(value, secret))
    return Output(data_future)


def _is_prompt(value: Input[T]) -> bool:
    """Checks if the value is prompty available."""

    return not isawaitable(value) and not isinstance(value, Output)


def _map2_output(
    o1: Output[T1], o2: Output[T2], transform: Callable[[T1, T2], U]
) -> Output[U]:
    """
    Joins two outputs and transforms their result with a pure function.
    Similar to `all` but does not deeply await.
    """

    async def fut() -> OutputData[U]:
        data1, data2 = await asyncio.gather(o1._data, o2._data)
        try:
            result = transform(data1.value, data2.value)
        except Exception as exn:
            raise TransformError(exn) from exn
        return OutputData(result, data1.secret or data2.secret)

    return Output(fut(), sources=[o1, o2])


def _map3_output(
    o1: Output[T1], o2: Output[T2], o3: Output[T3], transform: Callable[[T1, T2, T3], U]
) -> Output[U]:
    """
    Joins three outputs and transforms their result with a pure function.
    Similar to `all` but does not deeply await.
    """

    async def fut() -> OutputData[U]:
        data1, data2, data3 = await asyncio.gather(o1._data, o2._data, o3._data)
        try:
            result = transform(data1.value, data2.value, data3.value)
        except Exception as exn:
            raise TransformError(exn) from exn
        return OutputData(result, data1.secret or data2.secret or data3.secret)

    return Output(fut(), sources=[o1, o2, o3])
