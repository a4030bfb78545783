"""
Tests for render request serialization.
"""

from dataclasses import dataclass

from django.test import SimpleTestCase

from jsreport_django.dto import Phantom, RenderRequest, RenderResult, Template, to_jsonable


class RenderRequestToDictTestCase(SimpleTestCase):
    """Test cases for the jsreport wire format"""
    
    def test_wire_names(self):
        """Test that phantom options use jsreport's camelCase names"""
        request = RenderRequest(template=Template(
            content='<html/>',
            recipe='phantom-pdf',
            engine='none',
            phantom=Phantom(
                header_height='1cm',
                footer_height='1cm',
                wait_for_js=True,
                resource_timeout=100,
                block_javascript=True,
                print_delay=10,
                format='A4',
            ),
        ))
        
        self.assertEqual(request.to_dict(), {
            'template': {
                'content': '<html/>',
                'recipe': 'phantom-pdf',
                'engine': 'none',
                'phantom': {
                    'headerHeight': '1cm',
                    'footerHeight': '1cm',
                    'waitForJS': True,
                    'resourceTimeout': 100,
                    'blockJavaScript': True,
                    'printDelay': 10,
                    'format': 'A4',
                },
            },
        })
    
    def test_none_values_omitted(self):
        """Test that unset values are left out"""
        request = RenderRequest(template=Template(content=''), data={'a': None})
        
        self.assertEqual(request.to_dict(), {
            'template': {'content': ''},
            'data': {'a': None},
        })
    
    def test_to_jsonable_mapping_with_nested_objects(self):
        """Test that mappings with nested dataclasses and objects are converted"""
        @dataclass
        class Item:
            name: str
        
        class Customer:
            def __init__(self):
                self.name = 'ACME'
                self._internal = True
        
        payload = {
            'template': {'content': 'x', 'phantom': Phantom(format='A4')},
            'data': {'items': (Item('a'), Item('b')), 'customer': Customer()},
        }
        
        self.assertEqual(to_jsonable(payload), {
            'template': {'content': 'x', 'phantom': {'format': 'A4'}},
            'data': {'items': [{'name': 'a'}, {'name': 'b'}], 'customer': {'name': 'ACME'}},
        })


class RenderResultTestCase(SimpleTestCase):
    """Test cases for RenderResult"""
    
    def test_len_is_content_size(self):
        result = RenderResult(content=b'%PDF-1.4', content_type='application/pdf')
        self.assertEqual(len(result), 8)
    
    def test_file_extension(self):
        """Test that the File-Extension header is exposed"""
        result = RenderResult(
            content=b'',
            content_type='application/pdf',
            headers={'file-extension': ['pdf']},
        )
        self.assertEqual(result.file_extension, 'pdf')
        self.assertIsNone(RenderResult(content=b'', content_type='x').file_extension)
