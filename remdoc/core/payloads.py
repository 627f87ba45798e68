# Copyright 2026 Pramod Kumar Voola
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

# -----------------------------------------------------------------------------
# PAYLOAD BUILDER
# -----------------------------------------------------------------------------
# Responsibility: Translate deploy/compose/login parameters into the request
# records Portainer expects.
#
# Port mappings fan out into two parallel maps keyed "<containerPort>/<proto>":
#   ExposedPorts: {"80/tcp": {}}
#   PortBindings: {"80/tcp": [{"HostPort": "8080"}]}
# A repeated key overwrites the earlier mapping.
# -----------------------------------------------------------------------------

from remdoc.domain.models import (
    AuthRequest,
    CreateContainerRequest,
    DeployOptions,
    HostConfig,
    PortBinding,
    RestartPolicy,
    StackCreateRequest,
)


def build_create_container_request(opts: DeployOptions) -> CreateContainerRequest:
    """
    Build the body of POST /containers/create.

    Env entries are rendered as 'KEY=VALUE'. Their order on the wire is not
    part of the contract.
    """
    exposed_ports: dict[str, dict] = {}
    port_bindings: dict[str, list[PortBinding]] = {}

    for mapping in opts.ports:
        exposed_ports[mapping.key] = {}
        port_bindings[mapping.key] = [PortBinding(host_port=mapping.host_port)]

    env = [f"{key}={value}" for key, value in opts.env.items()]

    return CreateContainerRequest(
        image=opts.image,
        exposed_ports=exposed_ports,
        env=env,
        host_config=HostConfig(
            port_bindings=port_bindings,
            restart_policy=RestartPolicy(name=opts.restart),
            auto_remove=opts.auto_remove,
        ),
    )


def build_stack_request(name: str, compose_content: str) -> StackCreateRequest:
    """Build the body of POST /api/stacks for an inline compose file."""
    return StackCreateRequest(name=name, stack_file_content=compose_content, env=[])


def build_auth_request(username: str, password: str) -> AuthRequest:
    return AuthRequest(username=username, password=password)
