DEFAULT_TRANSFORMATION = 'R(0)*T(0,0)*S(1,1)'
DEFAULT_RECTANGLE = '-0.25 -0.25 0.25 0.25'

DEFAULT_RESOLUTION = (600, 600)
DEFAULT_PADDING = 100

LINE_WIDTH = 1.0
AXES_COLOR = 'black'
PATH_COLOR = 'black'
BACKGROUND_COLOR = 'white'

STATUS_INVALID_TRANSFORMATION = 'invalid transformation string'
STATUS_INVALID_RECTANGLE = 'invalid four values for rectangle'
