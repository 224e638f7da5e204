# -*- coding: utf-8 -*-
"""Documentation about VMCTorch"""

from .__version__ import __version__

__author__ = "Nicolas Renaud"
__email__ = 'n.renaud@esciencecenter.nl'

import twiggy
import sys
twiggy.quick_setup(file=sys.stdout)
log = twiggy.log.name('VMCTorch')
log.min_level = twiggy.levels.INFO

log.info(r" _   ____  _______________             _")
log.info(r"| | / /  |/  / ___/_  __/__  ________/ /  ")
log.info(r"| |/ / /|_/ / /__  / / / _ \/ __/ __/ _ \ ")
log.info(r"|___/_/  /_/\___/ /_/  \___/_/  \__/_//_/ ")
