# type: ignore
''' Text program image: comma separated decimal words '''

import pyparsing as pp


comment = pp.python_style_comment

word = pp.Regex('[0-9]+').set_parse_action(lambda r: int(r[0]))

words = word + pp.ZeroOrMore(pp.Suppress(',') + word) + pp.Optional(pp.Suppress(','))

image = pp.Optional(words) + pp.StringEnd()
image.ignore(comment)
