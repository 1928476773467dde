# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Utility exports."""

from .redact import redact_authorization, token_preview

__all__ = ["redact_authorization", "token_preview"]
