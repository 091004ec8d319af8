# Copyright (c) 2024-2026 nickdsmith. All Rights Reserved.
# SPDX-License-Identifier: PROPRIETARY
#
# This file is proprietary and confidential. Unauthorized copying of this file,
# via any medium is strictly prohibited.

"""Utility functions."""

from diagerrors.utils.json_serializers import json_serializer, to_json_scalar

__all__ = ["json_serializer", "to_json_scalar"]
