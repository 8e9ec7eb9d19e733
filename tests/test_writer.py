"""End-to-end tests: schema text in, Scala source out."""

import os

import pytest
from graphql import DocumentNode, parse

from schema_writer import GenerationConfig, SchemaParseError, generate, synthesize

from .conftest import gen, scala


def test_type_with_field_parameter() -> None:
    result = gen(
        """
        type Hero {
          name(pad: Int!): String!
          nick: String!
          bday: Int
        }
        """
    )
    assert result == scala(
        """
        object Types {
          final case class HeroNameArgs(pad: Int)
          final case class Hero(name: HeroNameArgs => String, nick: String, bday: scala.Option[Int])

        }
        """
    )


def test_simple_queries() -> None:
    result = gen(
        """
        type Query {
          user(id: Int): User
          userList: [User]!
        }
        type User {
          id: Int
          name: String
          profilePic: String
        }
        """
    )
    assert result == scala(
        """
        import Types._

        object Types {
          final case class QueryUserArgs(id: scala.Option[Int])
          final case class User(id: scala.Option[Int], name: scala.Option[String], profilePic: scala.Option[String])

        }

        object Operations {

          final case class Query(
            user: QueryUserArgs => zio.UIO[scala.Option[User]],
            userList: zio.UIO[List[scala.Option[User]]]
          )

        }
        """
    )


def test_simple_queries_with_abstract_effect() -> None:
    result = gen(
        """
        type Query {
          user(id: Int): User
          userList: [User]!
        }
        type User {
          id: Int
        }
        """,
        effect_type="F",
        is_effect_type_abstract=True,
    )
    assert result == scala(
        """
        import Types._

        object Types {
          final case class QueryUserArgs(id: scala.Option[Int])
          final case class User(id: scala.Option[Int])

        }

        object Operations {

          final case class Query[F[_]](
            user: QueryUserArgs => F[scala.Option[User]],
            userList: F[List[scala.Option[User]]]
          )

        }
        """
    )


def test_simple_subscription() -> None:
    result = gen(
        """
        type Subscription {
          UserWatch(id: Int!): String!
        }
        """
    )
    assert result == scala(
        """
        import Types._

        import zio.stream.ZStream

        object Types {
          final case class SubscriptionUserWatchArgs(id: Int)

        }

        object Operations {

          final case class Subscription(
            UserWatch: SubscriptionUserWatchArgs => ZStream[Any, Nothing, String]
          )

        }
        """
    )


def test_roots_render_query_mutation_subscription() -> None:
    result = gen(
        """
        type Subscription {
          postAdded: Post
        }
        type Mutation {
          addPost(author: String, comment: String): Post
        }
        type Query {
          posts: [Post]
        }
        type Post {
          author: String
          comment: String
        }
        """
    )
    assert result == scala(
        """
        import Types._

        import zio.stream.ZStream

        object Types {
          final case class MutationAddPostArgs(author: scala.Option[String], comment: scala.Option[String])
          final case class Post(author: scala.Option[String], comment: scala.Option[String])

        }

        object Operations {

          final case class Query(
            posts: zio.UIO[scala.Option[List[scala.Option[Post]]]]
          )

          final case class Mutation(
            addPost: MutationAddPostArgs => zio.UIO[scala.Option[Post]]
          )

          final case class Subscription(
            postAdded: ZStream[Any, Nothing, scala.Option[Post]]
          )

        }
        """
    )


@pytest.mark.parametrize("schema", ["", "   \n", "# only a comment\n"])
def test_empty_schema(schema: str) -> None:
    assert gen(schema) == os.linesep


def test_empty_document() -> None:
    assert synthesize(DocumentNode(definitions=[])) == os.linesep


def test_enum_type() -> None:
    result = gen(
        """
        enum Origin {
          EARTH
          MARS
          BELT
        }
        """
    )
    assert result == scala(
        """
        object Types {

          sealed trait Origin extends scala.Product with scala.Serializable

          object Origin {
            case object EARTH extends Origin
            case object MARS extends Origin
            case object BELT extends Origin
          }

        }
        """
    )


def test_union_type() -> None:
    result = gen(
        '''
        """
        role
        Captain or Pilot
        """
        union Role = Captain | Pilot
        "role2"
        union Role2 = Captain | Pilot | Stewart

        type Captain {
          "ship" shipName: String!
        }

        type Pilot {
          shipName: String!
        }

        type Stewart {
          shipName: String!
        }
        '''
    )
    assert result == (
        "import caliban.schema.Annotations._\n"
        "\n"
        "object Types {\n"
        "  final case class Captain(\n"
        '    @GQLDescription("ship")\n'
        "    shipName: String\n"
        "  ) extends Role with Role2\n"
        "  final case class Pilot(shipName: String) extends Role with Role2\n"
        "  final case class Stewart(shipName: String) extends Role2\n"
        "\n"
        '  @GQLDescription("""role\n'
        'Captain or Pilot""")\n'
        "  sealed trait Role extends scala.Product with scala.Serializable\n"
        '  @GQLDescription("role2")\n'
        "  sealed trait Role2 extends scala.Product with scala.Serializable\n"
        "\n"
        "}\n"
    )


def test_description_with_escaped_quotes() -> None:
    result = gen(
        r"""
        type Captain {
          "foo \"quotes\" bar" shipName: String!
        }
        """
    )
    assert result == scala(
        r"""
        import caliban.schema.Annotations._

        object Types {
          final case class Captain(
            @GQLDescription("foo \"quotes\" bar")
            shipName: String
          )

        }
        """
    )


def test_schema_definition_names_roots() -> None:
    result = gen(
        """
        schema {
          query: Queries
        }

        type Queries {
          characters: Int!
        }
        """
    )
    assert result == scala(
        """
        object Operations {

          final case class Queries(
            characters: zio.UIO[Int]
          )

        }
        """
    )


def test_input_type() -> None:
    result = gen(
        """
        type Character {
          name: String!
        }

        input CharacterArgs {
          name: String!
        }
        """
    )
    assert result == scala(
        """
        object Types {
          final case class Character(name: String)
          final case class CharacterArgs(name: String)

        }
        """
    )


def test_input_type_with_preserved_name() -> None:
    result = gen(
        """
        type Character {
          name: String!
        }

        input CharacterInput {
          name: String!
        }
        """,
        preserve_input_names=True,
    )
    assert result == scala(
        """
        import caliban.schema.Annotations._

        object Types {
          final case class Character(name: String)
          @GQLInputName("CharacterInput")
          final case class CharacterInput(name: String)

        }
        """
    )


def test_reserved_words_are_quoted() -> None:
    result = gen(
        """
        type Character {
          private: String!
          object: String!
          type: String!
        }
        """
    )
    assert result == scala(
        """
        object Types {
          final case class Character(`private`: String, `object`: String, `type`: String)

        }
        """
    )


def test_reserved_member_gets_marker() -> None:
    result = gen(
        """
        type Character {
          wait: String!
        }
        """
    )
    assert result == scala(
        """
        object Types {
          final case class Character(wait$: String)

        }
        """
    )


def test_args_class_names_are_unique() -> None:
    result = gen(
        """
        type Hero {
          callAllies(number: Int!): [Hero!]!
        }

        type Villain {
          callAllies(number: Int!, w: String!): [Villain!]!
        }
        """
    )
    assert result == scala(
        """
        object Types {
          final case class HeroCallAlliesArgs(number: Int)
          final case class VillainCallAlliesArgs(number: Int, w: String)
          final case class Hero(callAllies: HeroCallAlliesArgs => List[Hero])
          final case class Villain(callAllies: VillainCallAlliesArgs => List[Villain])

        }
        """
    )


def test_scalar_mappings_and_imports() -> None:
    result = gen(
        """
        scalar OffsetDateTime

        type Query {
          posts: [Post]
        }
        type Post {
          date: OffsetDateTime!
          author: String
        }
        """,
        package_name="com.example.api",
        scalar_mappings={"OffsetDateTime": "java.time.OffsetDateTime"},
        extra_imports=("java.util.UUID", "a.b._"),
    )
    assert result == scala(
        """
        package com.example.api

        import Types._

        import java.util.UUID
        import a.b._

        object Types {
          final case class Post(date: java.time.OffsetDateTime, author: scala.Option[String])

        }

        object Operations {

          final case class Query(
            posts: zio.UIO[scala.Option[List[scala.Option[Post]]]]
          )

        }
        """
    )


def test_interface_type() -> None:
    result = gen(
        '''
        """
        person
        Admin or Customer
        """
        interface Person {
          id: ID!
          firstName: String!
        }

        type Admin implements Person {
          id: ID!
          "firstName" firstName: String!
        }

        type Customer implements Person {
          id: ID!
          firstName: String!
          email: String!
        }
        ''',
        scalar_mappings={"ID": "java.util.UUID"},
    )
    assert result == (
        "import caliban.schema.Annotations._\n"
        "\n"
        "object Types {\n"
        "  final case class Admin(\n"
        "    id: java.util.UUID,\n"
        '    @GQLDescription("firstName")\n'
        "    firstName: String\n"
        "  ) extends Person\n"
        "  final case class Customer(id: java.util.UUID, firstName: String, email: String) extends Person\n"
        "\n"
        "  @GQLInterface\n"
        '  @GQLDescription("""person\n'
        'Admin or Customer""")\n'
        "  sealed trait Person extends scala.Product with scala.Serializable {\n"
        "    def id: java.util.UUID\n"
        "    def firstName: String\n"
        "  }\n"
        "\n"
        "}\n"
    )


def test_add_derives() -> None:
    result = gen(
        """
        type Hero {
          name(pad: Int!): String!
        }

        enum Episode {
          NEWHOPE
          JEDI
        }

        type Query {
          hero(episode: Episode): Hero
        }

        input HeroInput {
          name: String!
        }
        """,
        add_derives=True,
    )
    assert result == scala(
        """
        import Types._

        object Types {
          final case class HeroNameArgs(pad: Int) derives caliban.schema.Schema.SemiAuto, caliban.schema.ArgBuilder
          final case class QueryHeroArgs(episode: scala.Option[Episode]) derives caliban.schema.Schema.SemiAuto, caliban.schema.ArgBuilder
          final case class Hero(name: HeroNameArgs => String) derives caliban.schema.Schema.SemiAuto
          final case class HeroInput(name: String) derives caliban.schema.Schema.SemiAuto, caliban.schema.ArgBuilder

          sealed trait Episode extends scala.Product with scala.Serializable derives caliban.schema.Schema.SemiAuto, caliban.schema.ArgBuilder

          object Episode {
            case object NEWHOPE extends Episode derives caliban.schema.Schema.SemiAuto, caliban.schema.ArgBuilder
            case object JEDI extends Episode derives caliban.schema.Schema.SemiAuto, caliban.schema.ArgBuilder
          }

        }

        object Operations {

          final case class Query(
            hero: QueryHeroArgs => zio.UIO[scala.Option[Hero]]
          ) derives caliban.schema.Schema.SemiAuto

        }
        """
    )


def test_inherited_field_with_args() -> None:
    result = gen(
        """
        interface Character {
          friendsConnection(first: Int, after: ID): FriendsConnection!
        }
        type Human implements Character {
          friendsConnection(first: Int, after: ID): FriendsConnection!
        }
        type Droid implements Character {
          friendsConnection(first: Int, after: ID): FriendsConnection!
        }
        """,
        add_derives=True,
    )
    assert result == scala(
        """
        import caliban.schema.Annotations._

        object Types {
          final case class CharacterFriendsConnectionArgs(first: scala.Option[Int], after: scala.Option[ID]) derives caliban.schema.Schema.SemiAuto, caliban.schema.ArgBuilder
          final case class Human(friendsConnection: CharacterFriendsConnectionArgs => FriendsConnection) extends Character derives caliban.schema.Schema.SemiAuto
          final case class Droid(friendsConnection: CharacterFriendsConnectionArgs => FriendsConnection) extends Character derives caliban.schema.Schema.SemiAuto

          @GQLInterface
          sealed trait Character extends scala.Product with scala.Serializable derives caliban.schema.Schema.SemiAuto {
            def friendsConnection: CharacterFriendsConnectionArgs => FriendsConnection
          }

        }
        """
    )


def test_lazy_field_is_effectful() -> None:
    result = gen(
        """
        directive @lazy on FIELD_DEFINITION

        type Foo {
          bar: String!
          baz: String! @lazy
        }
        """
    )
    assert result == scala(
        """
        object Types {
          final case class Foo(bar: String, baz: zio.UIO[String])

        }
        """
    )


def test_lazy_field_with_abstract_effect() -> None:
    result = gen(
        """
        type Query {
          foo: Foo!
        }

        type Foo {
          bar: String!
          baz(id: Int!): String! @lazy
        }
        """,
        effect_type="F",
        is_effect_type_abstract=True,
    )
    assert result == scala(
        """
        import Types._

        object Types {
          final case class FooBazArgs(id: Int)
          final case class Foo[F[_]](bar: String, baz: FooBazArgs => F[String])

        }

        object Operations {

          final case class Query[F[_]](
            foo: F[Foo[F]]
          )

        }
        """
    )


def test_type_in_union_and_interface() -> None:
    result = gen(
        """
        schema {
          query: Query
        }

        union AllErrors = Bar | Foo

        interface Error {
          "description"
          message: String!
        }

        type Bar implements Error {
          message: String!
        }

        type Foo implements Error {
          message: String!
        }

        type Query {
          errorInterface: Error!
          errorUnion: AllErrors!
        }
        """,
        add_derives=True,
    )
    assert result == scala(
        """
        import Types._

        import caliban.schema.Annotations._

        object Types {
          final case class Bar(message: String) extends Error with AllErrors derives caliban.schema.Schema.SemiAuto
          final case class Foo(message: String) extends Error with AllErrors derives caliban.schema.Schema.SemiAuto

          sealed trait AllErrors extends scala.Product with scala.Serializable derives caliban.schema.Schema.SemiAuto
          @GQLInterface
          sealed trait Error extends scala.Product with scala.Serializable derives caliban.schema.Schema.SemiAuto {
            @GQLDescription("description")
            def message: String
          }

        }

        object Operations {

          final case class Query(
            errorInterface: zio.UIO[Error],
            errorUnion: zio.UIO[AllErrors]
          ) derives caliban.schema.Schema.SemiAuto

        }
        """
    )


def test_deprecated_field() -> None:
    result = gen(
        """
        type Hero {
          name: String! @deprecated(reason: "use fullName")
          fullName: String!
        }
        """
    )
    assert result == scala(
        """
        import caliban.schema.Annotations._

        object Types {
          final case class Hero(
            @GQLDeprecated("use fullName")
            name: String,
            fullName: String
          )

        }
        """
    )


def test_operations_without_type_references_skip_types_import() -> None:
    result = gen(
        """
        type Query {
          version: String!
        }
        enum Unused {
          A
        }
        """
    )
    assert result.startswith("object Types {")


def test_output_is_deterministic() -> None:
    schema = """
    union U = A | B
    interface I { x(n: Int): Int }
    type A implements I { x(n: Int): Int }
    type B implements I { x(n: Int): Int, y: [String!] @lazy }
    type Query { a: A, u(first: Int): [U] }
    type Subscription { b: B }
    enum E { ONE TWO }
    input In { e: E }
    """
    config = GenerationConfig(add_derives=True, scalar_mappings={"Int": "Long"})
    first = synthesize(parse(schema), config)
    assert all(synthesize(parse(schema), config) == first for _ in range(5))


def test_invalid_schema_raises_parse_error() -> None:
    with pytest.raises(SchemaParseError):
        generate("type Query {")


def test_distinct_fields_with_same_args_name_both_render() -> None:
    result = gen(
        """
        type Query { userById(id: Int!): String }
        type QueryUser { byId(name: String!, page: Int): String }
        """
    )
    assert result == scala(
        """
        import Types._

        object Types {
          final case class QueryUserByIdArgs(id: Int)
          final case class QueryUserByIdArgs2(name: String, page: scala.Option[Int])
          final case class QueryUser(byId: QueryUserByIdArgs2 => scala.Option[String])

        }

        object Operations {

          final case class Query(
            userById: QueryUserByIdArgs => zio.UIO[scala.Option[String]]
          )

        }
        """
    )


def test_names_ending_in_underscore_are_quoted() -> None:
    result = gen(
        """
        interface Named { name_: String! }
        type Hero implements Named { name_: String!, _: Boolean }
        """
    )
    assert "final case class Hero(`name_`: String, `_`: scala.Option[Boolean]) extends Named" in result
    assert "def `name_`: String" in result


def test_null_deprecation_reason_does_not_raise() -> None:
    result = gen('type Hero { name: String @deprecated(reason: null) }')
    assert '@GQLDeprecated("No longer supported")' in result
