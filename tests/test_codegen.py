"""
Tests for rendering the Zero schema module.
"""
import unittest

from zero_schema_generator.codegen import (
    generate_code,
    jinja2_quote_list_filter,
    jinja2_tojson_compact_filter,
)
from zero_schema_generator.config_validation import GeneratorConfigSchema
from zero_schema_generator.mapper import transform_schema

from helpers import (
    create_blog_document,
    create_document,
    create_field,
    create_id_field,
    create_many_to_many_document,
    create_model,
    create_relation,
)


EXPECTED_SINGLE_TABLE = '''// Generated by Zero Schema Generator

import {
  table,
  string,
  boolean,
  number,
  json,
  enumeration,
  relationships,
  createSchema,
  type Row,
} from "@rocicorp/zero";

// Define tables

export const tagTable = table("Tag")
  .columns({
    id: string(),
    label: string().optional(),
  })
  .primaryKey("id");

// Define schema

export const schema = createSchema(
  {
    tables: [
      tagTable,
    ],
  }
);

// Define types
export type Schema = typeof schema;
export type Tag = Row<typeof schema.tables.Tag>;
'''


class TestFilters(unittest.TestCase):

    def test_tojson_compact(self):
        self.assertEqual(jinja2_tojson_compact_filter(["a", "b"]), '["a","b"]')
        self.assertEqual(jinja2_tojson_compact_filter("x<y"), '"x<y"')

    def test_quote_list(self):
        self.assertEqual(jinja2_quote_list_filter(["a", "b"]), '"a", "b"')
        self.assertEqual(jinja2_quote_list_filter(["a", "b"], " | "), '"a" | "b"')


class TestGenerateCode(unittest.TestCase):

    def render(self, document, config=None, **options):
        return generate_code(transform_schema(document, **options), config or GeneratorConfigSchema())

    def test_single_table(self):
        document = create_document([
            create_model("Tag", [create_id_field(), create_field("label", is_required=False)])
        ])
        self.assertEqual(self.render(document), EXPECTED_SINGLE_TABLE)

    def test_schema_hash_in_header(self):
        schema = transform_schema(create_blog_document())
        code = generate_code(schema, GeneratorConfigSchema(), schema_hash="abc123")
        self.assertTrue(code.startswith("// Generated by Zero Schema Generator\n// Schema hash: abc123\n\nimport {"))

    def test_enums(self):
        code = self.render(create_blog_document())
        self.assertIn('// Define enums\n\nexport enum Role {\n  ADMIN = "ADMIN",\n  USER = "user",\n}\n\n', code)
        self.assertIn("    role: enumeration<Role>(),\n", code)

    def test_enums_as_unions(self):
        code = self.render(create_blog_document(), GeneratorConfigSchema(enumAsUnion=True))
        self.assertIn('// Define enums as unions\n\nexport type Role = "ADMIN" | "user";\n\n', code)
        self.assertNotIn("export enum", code)

    def test_one_to_many_relationships(self):
        code = self.render(create_blog_document())
        self.assertIn(
            "\n// Define relationships\n\n"
            "export const userTableRelationships = relationships(userTable, ({ many }) => ({\n"
            "  posts: many({\n"
            '    sourceField: ["id"],\n'
            '    destField: ["authorId"],\n'
            "    destSchema: postTable,\n"
            "  })\n"
            "}));\n\n",
            code,
        )
        self.assertIn(
            "export const postTableRelationships = relationships(postTable, ({ one }) => ({\n"
            "  author: one({\n"
            '    sourceField: ["authorId"],\n'
            '    destField: ["id"],\n'
            "    destSchema: userTable,\n"
            "  })\n"
            "}));\n\n",
            code,
        )
        self.assertIn(
            "    relationships: [\n      userTableRelationships,\n      postTableRelationships,\n    ],\n",
            code,
        )

    def test_many_to_many_chain(self):
        code = self.render(create_many_to_many_document(), remap_tables=True)
        self.assertIn(
            "  categories: many({\n"
            '    sourceField: ["id"],\n'
            '    destField: ["B"],\n'
            "    destSchema: _postToCategoryTable,\n"
            "  }, {\n"
            '    sourceField: ["A"],\n'
            '    destField: ["id"],\n'
            "    destSchema: categoryTable,\n"
            "  })\n",
            code,
        )
        self.assertIn(
            'export const _postToCategoryTable = table("_postToCategory")\n'
            '  .from("_PostToCategory")\n'
            "  .columns({\n"
            "    A: number(),\n"
            "    B: number(),\n"
            "  })\n"
            '  .primaryKey("A", "B");\n',
            code,
        )
        self.assertIn(
            "relationships(_postToCategoryTable, ({ one }) => ({\n"
            "  modelA: one({\n"
            '    sourceField: ["A"],\n'
            '    destField: ["id"],\n'
            "    destSchema: categoryTable,\n"
            "  }),\n"
            "  modelB: one({\n",
            code,
        )
        self.assertIn("export type _PostToCategory = Row<typeof schema.tables._postToCategory>;\n", code)

    def test_mixed_relationship_builders(self):
        category = create_model(
            "Category",
            [
                create_id_field(),
                create_field("parentId", is_required=False),
                create_relation(
                    "parent", "Category", "CategoryTree",
                    from_fields=["parentId"], to_fields=["id"], is_required=False,
                ),
                create_relation("children", "Category", "CategoryTree", is_list=True),
            ],
        )
        code = self.render(create_document([category]))
        self.assertIn("relationships(categoryTable, ({ one, many }) => ({\n  parent: one({", code)
        self.assertIn("  }),\n  children: many({\n", code)

    def test_remapped_names(self):
        message = create_model(
            "ChatMessage",
            [
                create_id_field(),
                create_field("senderID", db_name="sender_id", is_required=False),
                create_field("sent_at", "DateTime"),
            ],
        )
        code = self.render(create_document([message]), remap_tables=True, remap_columns=True)
        self.assertIn('export const chatMessageTable = table("chatMessage")\n  .from("ChatMessage")\n', code)
        self.assertIn("    senderID: string().from('sender_id').optional(),\n", code)
        self.assertIn("    sentAt: number().from('sent_at'),\n", code)
        self.assertIn("export type ChatMessage = Row<typeof schema.tables.chatMessage>;", code)

    def test_no_relationships_block_without_relationships(self):
        code = self.render(create_blog_document(), exclude_tables=["Post"])
        self.assertNotIn("// Define relationships", code)
        self.assertNotIn("relationships: [", code)

    def test_without_config(self):
        code = generate_code(transform_schema(create_blog_document()))
        self.assertIn("export enum Role", code)
