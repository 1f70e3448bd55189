# UI layer - 탭 줄, 하단 바, 텍스트 화면, 키 입력 라우팅
from .chrome import BarState, BottomBar, TabRow, INPUT_LABEL, LOADING_LABEL
from .surface import TextSurface, View
from .input_router import InputRouter, SHIFT_NUMBERS

__all__ = ['BarState', 'BottomBar', 'TabRow', 'INPUT_LABEL', 'LOADING_LABEL',
           'TextSurface', 'View', 'InputRouter', 'SHIFT_NUMBERS']
