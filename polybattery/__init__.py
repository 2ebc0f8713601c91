# Copyright (c) 2022 Daniel Pereira
#
# SPDX-License-Identifier: Apache-2.0

# polybattery polls the system battery and renders it as a plain percentage, a low battery desktop
# notification or a Polybar segment. See `cli.main` for the entrypoint.

__version__ = "0.6.0"
