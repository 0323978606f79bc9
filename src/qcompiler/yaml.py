# Copyright 2025 Qilimanjaro Quantum Tech
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

from pydantic import BaseModel
from ruamel.yaml import YAML


def pydantic_model_representer(representer, data):
    """Representer for Pydantic Models."""
    value = {"type": f"{data.__class__.__module__}.{data.__class__.__name__}", "data": data.model_dump(mode="json")}
    return representer.represent_mapping("!PydanticModel", value)


def pydantic_model_constructor(constructor, node):
    """Constructor for Pydantic Models."""
    mapping = constructor.construct_mapping(node, deep=True)
    model_type_str = mapping["type"]
    data = mapping["data"]
    module_name, class_name = model_type_str.rsplit(".", 1)
    mod = __import__(module_name, fromlist=[class_name])
    model_cls = getattr(mod, class_name)
    return model_cls.model_validate(data)


def tuple_representer(representer, data: tuple):
    """Representer for built-in Python tuple."""
    return representer.represent_sequence("!tuple", list(data))


def tuple_constructor(constructor, node):
    """Constructor for built-in Python tuple."""
    seq = constructor.construct_sequence(node, deep=True)
    return tuple(seq)


yaml = YAML(typ="unsafe")

yaml.representer.add_multi_representer(BaseModel, pydantic_model_representer)
yaml.constructor.add_constructor("!PydanticModel", pydantic_model_constructor)

yaml.representer.add_representer(tuple, tuple_representer)
yaml.constructor.add_constructor("!tuple", tuple_constructor)
