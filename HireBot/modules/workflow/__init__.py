# -*- coding: utf-8 -*-
"""Application intake and review state machine."""
