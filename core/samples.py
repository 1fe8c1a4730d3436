"""
Sample programs offered by the IDE.
"""

DEFAULT_PROGRAM = """; Rainbow demo
CS HOME PD
RAINBOW ON
HUESTEP 4
PENSIZE 6
REPEAT 120 [ FD 8 RT 7 ]"""

SAMPLES = {
    "Square": "REPEAT 4 [ FD 120 RT 90 ]",
    "Star": "REPEAT 5 [ FD 180 RT 144 ]",
    "Spiral": "CS HOME PD REPEAT 60 [ FD 5 RT 10 FD 5 ]",
    "RainbowSpiral": "CS HOME PD\nRAINBOW ON\nHUESTEP 4\nPENSIZE 2\nREPEAT 150 [ FD 6 RT 11 ]",
    "Nested": "CS HOME PD\nRAINBOW ON\nREPEAT 12 [\n  REPEAT 8 [ FD 80 RT 45 ]\n  RT 30\n]",
    "Snowflake": "CS HOME PD\nPENCOLOR 160 220 255\nREPEAT 6 [\n  REPEAT 3 [ FD 100 RT 60 ]\n  RT 60\n]",
    "PerfCircle": "CS HOME PD\nRAINBOW ON\nHUESTEP 3\nREPEAT 2000 [ FD 3 RT 5 ]",
    "ManyCircles": (
        "CS HOME PD\nRAINBOW ON\nPENSIZE 2\nHUESTEP 5\nPU HOME\n"
        "REPEAT 11 [ RT 30 HOME PU FD 160 LT 90 FD 65 LT 90 PD REPEAT 51 [ FD 8 RT 7 ] PU ]\n"
        "HOME PD"
    ),
    "Parabola": (
        "CS HOME\nPENCOLOR 255 120 0\n"
        "PLOT x^2/4 FROM -20 TO 20 STEPS 80 DOTS COLOR 255 255 255"
    ),
}
