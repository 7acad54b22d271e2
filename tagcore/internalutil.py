# License: BSD3

"""
Utility functions which are meant to be used by tagcore but aren't
expected to be too useful outside of it
"""


class TagcoreXmlException(Exception):
    """
    Structural problems in the XML files we read (missing or
    duplicated elements)
    """
    def __init__(self, msg):
        super(TagcoreXmlException, self).__init__(msg)


def on_single_element(root, default, f, name):
    """
    Return

       * the default if no elements
       * f(the node) if one element
       * an exception if more than one
    """
    nodes = root.findall(name)
    if len(nodes) == 0:
        if default is None:
            raise TagcoreXmlException("Expected but did not find any nodes "
                                      "with name %s" % name)
        else:
            return default
    elif len(nodes) > 1:
        raise TagcoreXmlException("Found more than one node with "
                                  "name %s" % name)
    else:
        return f(nodes[0])


def indent_xml(elem, level=0):
    """
    From <http://effbot.org/zone/element-lib.htm>

    WARNING: destructive
    """
    i = "\n" + level*"  "
    if len(elem):
        if not elem.text or not elem.text.strip():
            elem.text = i + "  "
        if not elem.tail or not elem.tail.strip():
            elem.tail = i
        for elem in elem:
            indent_xml(elem, level+1)
        if not elem.tail or not elem.tail.strip():
            elem.tail = i
    else:
        if level and (not elem.tail or not elem.tail.strip()):
            elem.tail = i
