# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""rocket-cli command-line package: descriptors, registry, and dispatch."""
